"""Provider anchored at an importable package."""

import importlib
import zipfile
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import List, Optional

from loaderchain.exceptions import TypeNotFoundError
from loaderchain.locator import Locator
from loaderchain.providers.base import ResourceProvider
from loaderchain.providers.typeload import load_by_import


def is_safe_name(name: str) -> bool:
    """Reject absolute names and names that climb out of the root."""
    if not name:
        return True
    pure = PurePosixPath(name)
    return not pure.is_absolute() and ".." not in pure.parts


def traversable_to_locator(candidate: Traversable) -> Optional[Locator]:
    """Convert an existing traversable into a locator.

    Filesystem paths become ``file://`` URLs and zip members become
    ``zip:`` URLs. Other traversables have no address and yield None.
    """
    if isinstance(candidate, Path):
        return Locator.from_path(candidate)
    if isinstance(candidate, zipfile.Path):
        archive = candidate.root.filename
        if archive is None:
            return None
        return Locator.from_zip_member(archive, candidate.at)
    return None


class PackageProvider(ResourceProvider):
    """Resources and types belonging to one top-level package.

    Resource names are relative to the package directory; ``""`` names
    the package directory itself. Only types whose module lives inside
    the package can be loaded.
    """

    def __init__(self, package: str) -> None:
        if not package or package.startswith("."):
            raise ValueError(f"Invalid package name: {package!r}")
        self.package = package

    def _root(self) -> Traversable:
        return resources.files(self.package)

    def _root_locator(self, root: Traversable) -> Optional[Locator]:
        locator = traversable_to_locator(root)
        if locator is not None:
            return locator
        # Namespace packages are multiplexed; report the first portion.
        module = importlib.import_module(self.package)
        for entry in getattr(module, "__path__", []):
            return Locator.from_path(Path(entry))
        return None

    def get_resource(self, name: str) -> Optional[Locator]:
        if not is_safe_name(name):
            return None
        root = self._root()
        if not name:
            return self._root_locator(root)
        candidate = root.joinpath(*PurePosixPath(name).parts)
        if not (candidate.is_file() or candidate.is_dir()):
            return None
        return traversable_to_locator(candidate)

    def get_resources(self, name: str) -> List[Locator]:
        locator = self.get_resource(name)
        return [locator] if locator is not None else []

    def load_type(self, qualified_name: str) -> type:
        if not (
            qualified_name.startswith(self.package + ".")
            and len(qualified_name) > len(self.package) + 1
        ):
            raise TypeNotFoundError(
                f"Type '{qualified_name}' is outside package '{self.package}'",
                qualified_name,
                self,
            )
        return load_by_import(qualified_name, importlib.import_module, self)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PackageProvider) and other.package == self.package

    def __hash__(self) -> int:
        return hash((PackageProvider, self.package))

    def __repr__(self) -> str:
        return f"PackageProvider({self.package!r})"
