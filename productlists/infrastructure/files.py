"""File storage used by exports."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4


@dataclass(frozen=True)
class StoredFile:
    """A file kept by a file store."""

    file_id: str
    name: str
    content: bytes
    media_type: str


class FileStore(ABC):
    """Creates and loads files by id."""

    @abstractmethod
    def save(self, name: str, content: bytes, media_type: str) -> str:
        """Store a file and return its id."""

    @abstractmethod
    def load(self, file_id: str) -> StoredFile:
        """Load a stored file.

        Raises:
            FileNotFoundError: If no file has that id.
        """


class LocalFileStore(FileStore):
    """File store writing under a local directory.

    Each file is kept in its own sub-directory named after the file id so
    that several exports can share a file name.
    """

    MEDIA_TYPES = {
        ".xls": "application/vnd.ms-excel",
        ".xml": "application/xml",
        ".csv": "text/csv",
    }

    def __init__(self, root: Path) -> None:
        self.root = root

    def save(self, name: str, content: bytes, media_type: str) -> str:
        file_id = uuid4().hex
        path = self.root / file_id / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return file_id

    def load(self, file_id: str) -> StoredFile:
        directory = self.root / file_id
        files = sorted(directory.iterdir()) if directory.is_dir() else []
        if not files:
            raise FileNotFoundError(f"No stored file with id {file_id}")
        path = files[0]
        return StoredFile(
            file_id=file_id,
            name=path.name,
            content=path.read_bytes(),
            media_type=self.MEDIA_TYPES.get(path.suffix, "application/octet-stream"),
        )
