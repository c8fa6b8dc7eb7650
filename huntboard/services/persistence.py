"""
JSON snapshot persistence

Last write wins. Failures are logged and never propagate into request
handling; the in-memory state stays authoritative.
"""
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from huntboard.models import Snapshot
from huntboard.seed_loader import validate_snapshot


logger = logging.getLogger(__name__)


def save_snapshot(path: str, snapshot: Snapshot) -> bool:
    """
    Write teams and challenges to ``path`` atomically

    Returns:
        True on success, False if the write failed
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".snapshot-", suffix=".json")
    except OSError as e:
        logger.warning(f"⚠️ Could not save snapshot to {path}: {e}")
        return False

    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(snapshot.to_wire(), f, ensure_ascii=False, indent=2)
        os.replace(tmp_name, target)
    except OSError as e:
        logger.warning(f"⚠️ Could not save snapshot to {path}: {e}")
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        return False
    return True


class SnapshotWriter:
    """
    Serialized snapshot writes for one path

    Background saves can finish out of order; a snapshot older than the
    last one written is dropped so a stale state never replaces a newer one.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()
        self._written_version = -1

    @property
    def written_version(self) -> int:
        return self._written_version

    def write(self, version: int, snapshot: Snapshot) -> bool:
        with self._lock:
            if version <= self._written_version:
                logger.info(f"Skipping snapshot v{version}, v{self._written_version} already written")
                return False
            if not save_snapshot(self.path, snapshot):
                return False
            self._written_version = version
            return True


def load_snapshot(path: Optional[str]) -> Optional[Snapshot]:
    """
    Restore a previously saved snapshot

    Returns:
        The snapshot, or None when it is missing, unreadable, invalid or
        has no teams or no challenges (caller falls back to the seed)
    """
    if not path:
        return None
    source = Path(path)
    if not source.exists():
        return None

    try:
        with open(source, 'r', encoding='utf-8') as f:
            data = json.load(f)
        snapshot = validate_snapshot(Snapshot(**data))
    except (OSError, ValueError, TypeError, ValidationError) as e:
        logger.warning(f"⚠️ Ignoring unusable snapshot {path}: {e}")
        return None

    if not snapshot.teams or not snapshot.challenges:
        logger.warning(f"⚠️ Ignoring empty snapshot {path}")
        return None

    logger.info(f"✅ Restored {len(snapshot.teams)} teams from snapshot {path}")
    return snapshot
