"""
Ranuras de subida del cliente

Cada ranura (Image, Mask) guarda como mucho un fichero y su vista previa
derivada. La selección de ficheros se expresa como una capacidad inyectable:
una función que recibe el filtro de tipos y devuelve un fichero o None.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from inpaint_app.utils import build_data_uri, guess_content_type

IMAGE_SLOT = "Image"
MASK_SLOT = "Mask"


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    content: bytes
    content_type: str

    @classmethod
    def from_path(cls, path: str | Path) -> "UploadedFile":
        path = Path(path)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=guess_content_type(path.name),
        )


# Receives the accept filter (e.g. "image/*"); None means the user cancelled
FileSelector = Callable[[str], UploadedFile | None]


class UploadSlot:

    def __init__(self, label: str):
        self.label = label
        self.file: UploadedFile | None = None
        self.preview_data_uri: str | None = None

    def set_file(self, file: UploadedFile | None) -> None:
        """Replace the held file; the previous blob and preview are discarded."""
        self.file = file
        self.preview_data_uri = (
            build_data_uri(file.content, file.content_type) if file else None
        )

    @property
    def is_empty(self) -> bool:
        return self.file is None

    def __repr__(self) -> str:
        name = self.file.filename if self.file else None
        return f"UploadSlot(label={self.label!r}, file={name!r})"


def path_selector(path: str | Path | None) -> FileSelector:
    """
    Selector that always answers with the file at `path` (or None when unset).
    """

    def select(accept: str) -> UploadedFile | None:
        if path is None:
            return None
        return UploadedFile.from_path(path)

    return select
