from __future__ import annotations

import logging
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import BinaryIO, Iterable, Protocol

from annotation_configurator.errors import SourceLookupError

LOGGER = logging.getLogger(__name__)


class SourceLoader(Protocol):
    """Resolves logical source names to readable content."""

    def lookup(self, name: str) -> BinaryIO | None:
        """Return an open binary stream for ``name`` or ``None`` when it does not exist."""
        ...


class ResourceLoader:
    """Looks up sources in an ordered list of directories and package resource roots.

    Roots are searched in order and the first regular file wins. Package roots
    are resolved with :mod:`importlib.resources`, so files shipped inside an
    installed distribution (including zipped ones) are found the same way as
    plain directories.
    """

    def __init__(self, roots: Iterable[Path | Traversable] | None = None):
        self._roots: list[Path | Traversable] = list(roots) if roots is not None else [Path.cwd()]

    @classmethod
    def from_locations(
        cls,
        directories: Iterable[Path | str] = (),
        packages: Iterable[str] = (),
    ) -> ResourceLoader:
        roots: list[Path | Traversable] = [Path(directory).expanduser() for directory in directories]
        for package in packages:
            try:
                roots.append(resources.files(package))
            except ModuleNotFoundError as exc:
                raise SourceLookupError(f"Resource package does not exist: {package}") from exc
        return cls(roots or None)

    @property
    def roots(self) -> list[Path | Traversable]:
        return list(self._roots)

    def lookup(self, name: str) -> BinaryIO | None:
        _check_relative(name)
        for root in self._roots:
            candidate = root.joinpath(name)
            if candidate.is_file():
                return candidate.open("rb")
        LOGGER.warning("Did not find source %s in %d search root(s)", name, len(self._roots))
        return None

    def list_file_names(self, directory: str) -> list[str]:
        """List regular, non-hidden files directly inside ``directory``."""
        _check_relative(directory)
        for root in self._roots:
            candidate = root.joinpath(directory)
            if not candidate.is_dir():
                continue
            return sorted(
                entry.name
                for entry in candidate.iterdir()
                if entry.is_file() and not entry.name.startswith(".")
            )
        raise SourceLookupError(f"Resource directory does not exist: {directory}")


def _check_relative(name: str) -> None:
    """Names are resolved inside a search root; absolute paths and ``..`` segments are rejected."""
    path = PurePosixPath(name.replace("\\", "/"))
    if path.is_absolute() or PureWindowsPath(name).is_absolute() or ".." in path.parts:
        raise SourceLookupError(f"Resource name must stay inside its search root: {name}")
