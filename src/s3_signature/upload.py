import dataclasses
import mimetypes
import pathlib
from typing import Protocol


class Upload(Protocol):
    """What the signer needs to know about an upload's body."""

    def size(self) -> int: ...

    def content_type(self) -> str: ...

    def read_all_bytes(self) -> bytes: ...


@dataclasses.dataclass(frozen=True)
class BytesUpload:
    data: bytes
    mime_type: str = "application/octet-stream"

    def size(self) -> int:
        return len(self.data)

    def content_type(self) -> str:
        return self.mime_type

    def read_all_bytes(self) -> bytes:
        return self.data


class FileUpload:
    """Upload backed by a file on disk, read when the signature is computed."""

    def __init__(self, path: str | pathlib.Path, content_type: str | None = None):
        self.path = pathlib.Path(path)
        self._content_type = content_type

    def size(self) -> int:
        return self.path.stat().st_size

    def content_type(self) -> str:
        if self._content_type:
            return self._content_type
        guessed, _ = mimetypes.guess_type(self.path.name)
        return guessed or "application/octet-stream"

    def read_all_bytes(self) -> bytes:
        return self.path.read_bytes()
