import mimetypes
from pathlib import Path

from dealbrief.ingestion.models import UploadedDocument


class FileLoader:
    """Reads a local file into an UploadedDocument ready for ingestion."""

    def load(self, path: Path) -> UploadedDocument:
        """Read file bytes from disk and guess the MIME type from the name.

        Raises:
            FileNotFoundError: if the file does not exist.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        mime_type, _ = mimetypes.guess_type(path.name)
        return UploadedDocument(
            name=path.name,
            content=path.read_bytes(),
            mime_type=mime_type or "",
        )
