from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Protocol


class SnapshotStore(Protocol):
    def read(self, key: str) -> Optional[bytes]: ...

    def write(self, key: str, data: bytes) -> None: ...


class FileSnapshotStore:
    """Snapshots kept as plain files named by key inside ``directory``."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / key

    def read(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        if path.exists():
            return path.read_bytes()
        return None

    def write(self, key: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path_for(key).write_bytes(data)


class MemorySnapshotStore:
    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self.snapshots: Dict[str, bytes] = dict(initial or {})

    def read(self, key: str) -> Optional[bytes]:
        return self.snapshots.get(key)

    def write(self, key: str, data: bytes) -> None:
        self.snapshots[key] = data
