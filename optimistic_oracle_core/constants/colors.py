from enum import Enum


class CliColor(str, Enum):
    """CLI color scheme"""

    SUCCESS = "green"
    ERROR = "red"
    WARNING = "yellow"
    INFO = "blue"
    HEADER = "cyan"
    ADDRESS = "bright_blue"
    HASH = "bright_black"
    PROGRESS = "yellow"
    TITLE = "bright_cyan"
    DETAIL = "bright_white"
    VALUE = "bright_magenta"

    # Request status badges
    OPEN = "bright_blue"
    CHALLENGE = "bright_yellow"
    DISPUTE = "magenta"
    SETTLED = "bright_green"
    WITHDRAWN = "white"
