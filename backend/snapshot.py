"""Loading of persisted schedule snapshots (the editor's "Save to File" JSON)."""

import json
import logging
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from compliance.dates import coerce_date
from schemas import Snapshot


class SnapshotError(ValueError):
    """The snapshot file cannot be read or does not have the expected shape."""


def parse_snapshot(payload: dict) -> Snapshot:
    try:
        return Snapshot.model_validate(payload)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot: {e.error_count()} validation error(s)\n{e}") from e


def load_snapshot(path: str | Path) -> Snapshot:
    """
    Read a snapshot JSON file.

    Raises:
        SnapshotError: If the file is missing, not JSON, or has the wrong shape
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot {path} is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise SnapshotError(f"Snapshot {path} must contain a JSON object")

    snapshot = parse_snapshot(payload)
    logging.info(
        f"Loaded snapshot {path.name}: {len(snapshot.employees)} employee(s), "
        f"{len(snapshot.schedule)} scheduled day(s)"
    )
    return snapshot


def snapshot_reference_date(snapshot: Snapshot, fallback: date | None = None) -> date:
    """The month the snapshot was being edited in, or the fallback."""
    if snapshot.current_date:
        try:
            return coerce_date(snapshot.current_date)
        except ValueError:
            logging.warning(f"Ignoring unreadable currentDate {snapshot.current_date!r} in snapshot")
    if fallback is None:
        raise SnapshotError("Snapshot has no currentDate and no reference date was given")
    return fallback
