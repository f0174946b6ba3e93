"""Validation of question text and proposed answers."""

from optimistic_oracle_core.models.oracle_datums import (
    MAX_ANSWER_LENGTH,
    MAX_QUESTION_LENGTH,
    AnswerType,
    MultipleChoice,
    Numeric,
    YesNo,
)
from optimistic_oracle_core.oracle.exceptions import (
    AnswerTooLong,
    InvalidAnswer,
    QuestionTooLong,
)

YES_NO_ANSWERS = ("YES", "NO")


def text_length(text: str) -> int:
    """Length in stored units (UTF-8 bytes)."""
    return len(text.encode("utf-8"))


def is_numeric_answer(answer: str) -> bool:
    """Check if answer parses as an ASCII float literal.

    Surrounding whitespace, digit-group underscores, non-ASCII digits and the
    empty string are rejected even though float() would accept some of them.
    """
    if not answer or not answer.isascii():
        return False
    if answer != answer.strip() or "_" in answer:
        return False
    try:
        float(answer)
    except ValueError:
        return False
    return True


def validate_question(question: str) -> None:
    if text_length(question) > MAX_QUESTION_LENGTH:
        raise QuestionTooLong(
            f"Question too long (max {MAX_QUESTION_LENGTH} characters)"
        )


def validate_answer(answer: str, answer_type: AnswerType) -> None:
    """Validate length and format of a proposed answer.

    Raises:
        AnswerTooLong: If the answer exceeds the maximum length
        InvalidAnswer: If the answer does not match the answer type
    """
    if text_length(answer) > MAX_ANSWER_LENGTH:
        raise AnswerTooLong(f"Answer too long (max {MAX_ANSWER_LENGTH} characters)")

    if isinstance(answer_type, YesNo):
        if answer not in YES_NO_ANSWERS:
            raise InvalidAnswer(f"Expected YES or NO, got '{answer}'")
    elif isinstance(answer_type, Numeric):
        if not is_numeric_answer(answer):
            raise InvalidAnswer(f"Expected a numeric answer, got '{answer}'")
    elif not isinstance(answer_type, MultipleChoice):
        raise InvalidAnswer(f"Unknown answer type {answer_type!r}")
