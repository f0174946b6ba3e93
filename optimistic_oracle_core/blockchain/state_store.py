"""JSON state file for the local ledger and oracle program."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pycardano.exception import DeserializeException

from optimistic_oracle_core.blockchain.clock import Clock
from optimistic_oracle_core.blockchain.events import EventLog
from optimistic_oracle_core.blockchain.ledger import (
    Ledger,
    TransferRecord,
    account_from_label,
    account_label,
)
from optimistic_oracle_core.models.events import OracleEvent
from optimistic_oracle_core.models.oracle_datums import OracleStateDatum, RequestDatum
from optimistic_oracle_core.oracle.exceptions import (
    DeserializationError,
    SerializationError,
)
from optimistic_oracle_core.oracle.program import OracleProgram

logger = logging.getLogger(__name__)

STATE_VERSION = 1


def program_to_dict(program: OracleProgram) -> dict[str, Any]:
    """Snapshot of everything needed to restore a program."""
    registry = program.registry.to_cbor_hex() if program.is_initialized else None
    events = (
        [event.to_dict() for event in program.event_sink.events]
        if isinstance(program.event_sink, EventLog)
        else []
    )
    return {
        "version": STATE_VERSION,
        "registry": registry,
        "requests": {
            str(request_id): request.to_cbor_hex()
            for request_id, request in sorted(program.requests.items())
        },
        "balances": {
            account_label(account): amount
            for account, amount in program.ledger.balances.items()
        },
        "journal": [record.to_dict() for record in program.ledger.journal],
        "events": events,
        "executed_digests": sorted(d.hex() for d in program.executed_digests),
    }


def program_from_dict(data: dict[str, Any], clock: Clock | None = None) -> OracleProgram:
    """Rebuild a program from `program_to_dict` output.

    Raises:
        DeserializationError: If the data is malformed
    """
    try:
        if data.get("version") != STATE_VERSION:
            raise ValueError(f"Unsupported state version {data.get('version')!r}")

        registry = (
            OracleStateDatum.from_cbor(bytes.fromhex(data["registry"]))
            if data.get("registry")
            else None
        )
        requests = {
            int(request_id): RequestDatum.from_cbor(bytes.fromhex(datum))
            for request_id, datum in data.get("requests", {}).items()
        }
        for request_id, request in requests.items():
            if request.request_id != request_id:
                raise ValueError(f"Request {request_id} stored under wrong key")

        ledger = Ledger(
            balances={
                account_from_label(label): int(amount)
                for label, amount in data.get("balances", {}).items()
            },
            journal=[TransferRecord.from_dict(r) for r in data.get("journal", [])],
        )
        events = EventLog([OracleEvent.from_dict(e) for e in data.get("events", [])])
        executed = {bytes.fromhex(d) for d in data.get("executed_digests", [])}

    except (KeyError, ValueError, TypeError, DeserializeException) as e:
        raise DeserializationError(f"Invalid oracle state: {e}") from e

    return OracleProgram(
        ledger=ledger,
        clock=clock,
        event_sink=events,
        registry=registry,
        requests=requests,
        executed_digests=executed,
    )


class StateStore:
    """Loads and saves an `OracleProgram` to a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self, clock: Clock | None = None) -> OracleProgram:
        """Load the program, or start a fresh one if no state file exists."""
        if not self.path.exists():
            logger.info("No state file at %s, starting empty ledger", self.path)
            return OracleProgram(clock=clock)

        try:
            with open(self.path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DeserializationError(f"Corrupt state file {self.path}: {e}") from e

        program = program_from_dict(data, clock=clock)
        logger.debug(
            "Loaded %d requests from %s", len(program.requests), self.path
        )
        return program

    def save(self, program: OracleProgram) -> Path:
        """Write the program state, replacing the file in one step."""
        try:
            payload = json.dumps(program_to_dict(program), indent=2)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize oracle state: {e}") from e

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w") as f:
            f.write(payload)
        os.replace(tmp_path, self.path)
        logger.debug("Saved oracle state to %s", self.path)
        return self.path
