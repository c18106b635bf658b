"""
Resource providers - where the raw table bytes come from.

The loader only asks a provider to open a binary stream; it reads it
fully inside a `with` block and never keeps it open.
"""

import io
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import BinaryIO


class ResourceProvider(ABC):
    """Source of the translation table bytes (UTF-8 text)."""

    name: str

    @abstractmethod
    def open(self) -> BinaryIO:
        """Open the resource for reading.

        Raises:
            OSError: If the resource cannot be opened.
        """


class FileResource(ResourceProvider):
    """Table stored as a file on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.name = str(self.path)

    def open(self) -> BinaryIO:
        return open(self.path, "rb")


class PackageResource(ResourceProvider):
    """Table shipped as data inside an installed Python package.

    Usage:
        PackageResource("my_mod.localization", "translation.csv")
    """

    def __init__(self, package: str, resource: str) -> None:
        self.package = package
        self.resource = resource
        self.name = f"{package}/{resource}"

    def open(self) -> BinaryIO:
        return resources.files(self.package).joinpath(self.resource).open("rb")


class TextResource(ResourceProvider):
    """Table held in memory, mostly useful for tests and tooling."""

    def __init__(self, text: str, name: str = "<text>") -> None:
        self.data = text.encode("utf-8")
        self.name = name

    def open(self) -> BinaryIO:
        return io.BytesIO(self.data)
