"""Snapshot storage.

Each fetch writes one JSON file per source system into the snapshots
directory. Readers only ever want the most recent snapshot of a kind; older
files are kept for reference and listing.

File layout:
    <data_dir>/snapshots/official_data_2025-01-31_181502.json
    <data_dir>/snapshots/secondary_data_2025-01-31_181507.json
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from .config import get_snapshots_path
from .schemas import OfficialSnapshot, SecondarySnapshot

logger = logging.getLogger(__name__)

Snapshot = Union[OfficialSnapshot, SecondarySnapshot]


class SnapshotKind(str, Enum):
    OFFICIAL = "official"
    SECONDARY = "secondary"

    @property
    def file_prefix(self) -> str:
        return f"{self.value}_data_"


SNAPSHOT_MODELS: Dict[SnapshotKind, Type[BaseModel]] = {
    SnapshotKind.OFFICIAL: OfficialSnapshot,
    SnapshotKind.SECONDARY: SecondarySnapshot,
}


class SnapshotError(Exception):
    """Base class for snapshot storage errors."""
    pass


class SnapshotNotFoundError(SnapshotError):
    """Raised when no snapshot of the requested kind exists."""
    pass


class SnapshotInvalidError(SnapshotError):
    """Raised when a snapshot file can't be read or doesn't match its schema."""
    pass


@dataclass(frozen=True)
class SnapshotInfo:
    """A stored snapshot file, newest first when listed."""

    kind: SnapshotKind
    path: Path
    modified: datetime

    @property
    def name(self) -> str:
        return self.path.name


def parse_snapshot(kind: SnapshotKind, payload: dict) -> Snapshot:
    """Validate a snapshot payload against the schema of its kind.

    Raises:
        SnapshotInvalidError: If the payload doesn't match the schema.
    """
    model = SNAPSHOT_MODELS[kind]
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise SnapshotInvalidError(f"Invalid {kind.value} snapshot: {e}") from e


class SnapshotRepository:
    """Latest-wins JSON snapshot store for both source systems."""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else get_snapshots_path()

    def _files(self, kind: SnapshotKind) -> List[Path]:
        if not self.base_dir.exists():
            return []
        files = [p for p in self.base_dir.glob(f"{kind.file_prefix}*.json") if p.is_file()]
        # Newest first; name breaks ties between files written in the same tick.
        files.sort(key=lambda p: (p.stat().st_mtime, p.name), reverse=True)
        return files

    def list(self, kind: Optional[SnapshotKind] = None) -> List[SnapshotInfo]:
        """List stored snapshots, newest first, optionally for one kind."""
        kinds = [kind] if kind else list(SnapshotKind)
        infos = []
        for k in kinds:
            for path in self._files(k):
                infos.append(SnapshotInfo(
                    kind=k,
                    path=path,
                    modified=datetime.fromtimestamp(path.stat().st_mtime),
                ))
        infos.sort(key=lambda i: i.modified, reverse=True)
        return infos

    def latest_path(self, kind: SnapshotKind) -> Path:
        """Path of the most recently modified snapshot of a kind.

        Raises:
            SnapshotNotFoundError: If none exist.
        """
        files = self._files(kind)
        if not files:
            raise SnapshotNotFoundError(
                f"No {kind.value} snapshot found in {self.base_dir}"
            )
        return files[0]

    def load_latest(self, kind: SnapshotKind) -> Snapshot:
        """Load the most recently modified snapshot of a kind.

        Raises:
            SnapshotNotFoundError: If none exist.
            SnapshotInvalidError: If the latest file is unreadable or invalid.
        """
        path = self.latest_path(kind)
        logger.info(f"Loading latest {kind.value} snapshot: {path}")
        return self.load(kind, path)

    def load(self, kind: SnapshotKind, path: Path) -> Snapshot:
        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotInvalidError(f"Failed to read {path}: {e}") from e
        return parse_snapshot(kind, payload)

    def save(self, kind: SnapshotKind, snapshot: Snapshot, fetched_at: Optional[datetime] = None) -> Path:
        """Write a snapshot as a new file; it becomes the latest of its kind."""
        expected = SNAPSHOT_MODELS[kind]
        if not isinstance(snapshot, expected):
            raise TypeError(f"{kind.value} snapshot must be {expected.__name__}, got {type(snapshot).__name__}")

        if fetched_at is None:
            fetched_at = datetime.now()

        self.base_dir.mkdir(parents=True, exist_ok=True)
        path = self.base_dir / f"{kind.file_prefix}{fetched_at.strftime('%Y-%m-%d_%H%M%S')}.json"

        with open(path, "w", encoding="utf-8") as f:
            json.dump(snapshot.model_dump(by_alias=True), f, indent=2, ensure_ascii=False)

        logger.info(f"Saved {kind.value} snapshot to {path}")
        return path
