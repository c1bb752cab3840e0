from pathlib import Path

from contract_analyzer.storage.exceptions import InvalidLocationError, StorageReadError


def document_location(document_id: str, file_name: str) -> str:
    """Build the storage key for an uploaded file: documents/{id}/{file_name}"""
    return f"documents/{document_id}/{Path(file_name).name}"


class FileStorage:
    """Reads and writes document bytes under a local root directory."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def read(self, location: str) -> bytes:
        """Read stored bytes.

        Raises:
            StorageReadError: if nothing is stored at the location or it cannot be read.
            InvalidLocationError: if the location escapes the storage root.
        """
        path = self._resolve_path(location)
        if not path.is_file():
            raise StorageReadError(f"File not found: {location}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageReadError(f"Failed to read {location}: {exc}") from exc

    def write(self, location: str, data: bytes) -> None:
        """Store bytes at a location, creating parent directories."""
        path = self._resolve_path(location)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def delete(self, location: str) -> None:
        """Remove stored bytes and the document directory if it is left empty."""
        path = self._resolve_path(location)
        path.unlink(missing_ok=True)
        parent = path.parent
        if parent != self._files_root.resolve() and parent.is_dir() and not any(parent.iterdir()):
            parent.rmdir()

    def _resolve_path(self, location: str) -> Path:
        root = self._files_root.resolve()
        path = (root / location).resolve()
        if not path.is_relative_to(root):
            raise InvalidLocationError(f"Location '{location}' is outside the storage root")
        return path
