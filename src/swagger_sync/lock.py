"""Lock file persistence for snapshots.

The lock holds ``{"mods": [...], "definitions": [...]}``. Impact data is never
written; it is recomputed from the loaded snapshot when needed.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from swagger_sync.errors import LockFileError
from swagger_sync.parser.base import Snapshot

logger = logging.getLogger(__name__)


def serialize(snapshot: Snapshot) -> str:
    data = snapshot.model_dump(mode="json", by_alias=True)
    return json.dumps(data, indent=2, ensure_ascii=False)


def deserialize(text: str, source: str = "<lock>") -> Snapshot:
    """Rebuild a snapshot from lock text. Owners are re-parsed from module descriptions."""
    try:
        snapshot = Snapshot.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as e:
        raise LockFileError(source, str(e)) from e

    for mod in snapshot.mods:
        mod.refresh_owners()
    return snapshot


def load_lock(path: Path) -> Snapshot | None:
    """Load the snapshot stored at ``path``, or None if there is no lock yet."""
    if not path.exists():
        logger.info("No lock file at %s", path)
        return None
    return deserialize(path.read_text(encoding="utf-8"), str(path))


def save_lock(snapshot: Snapshot, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(snapshot), encoding="utf-8")
    logger.info("Saved %d modules and %d definitions to %s", len(snapshot.mods), len(snapshot.definitions), path)
