"""Providers backed by an ordered list of directories."""

import importlib
import os
import sys
import threading
from importlib.machinery import PathFinder
from importlib.util import module_from_spec
from pathlib import Path, PurePosixPath
from types import ModuleType
from typing import Dict, Iterable, List, Optional, Union

from loaderchain.locator import Locator
from loaderchain.providers.base import ResourceProvider
from loaderchain.providers.package import is_safe_name
from loaderchain.providers.typeload import load_by_import


class PathProvider(ResourceProvider):
    """Search a fixed, ordered list of root directories.

    The first root wins for single lookups; ``get_resources`` returns a
    match from every root that holds the name. Modules loaded by
    ``load_type`` are kept in a cache private to this provider. They are
    visible in ``sys.modules`` only while one of their package's modules
    executes, so relative and same-package absolute imports work.
    """

    def __init__(self, roots: Iterable[Union[str, Path]]) -> None:
        self._roots = [Path(r) for r in roots]
        self._modules: Dict[str, ModuleType] = {}
        self._lock = threading.RLock()

    @property
    def roots(self) -> List[Path]:
        return list(self._roots)

    def _candidates(self, name: str) -> Iterable[Path]:
        parts = PurePosixPath(name).parts
        for root in self.roots:
            yield root.joinpath(*parts)

    def get_resource(self, name: str) -> Optional[Locator]:
        if not is_safe_name(name):
            return None
        for candidate in self._candidates(name):
            if candidate.exists():
                return Locator.from_path(candidate)
        return None

    def get_resources(self, name: str) -> List[Locator]:
        if not is_safe_name(name):
            return []
        return [
            Locator.from_path(candidate)
            for candidate in self._candidates(name)
            if candidate.exists()
        ]

    def _import(self, module_name: str) -> ModuleType:
        with self._lock:
            if module_name in self._modules:
                return self._modules[module_name]

            parent_name, _, _ = module_name.rpartition(".")
            if parent_name:
                parent = self._import(parent_name)
                search = getattr(parent, "__path__", None)
                if search is None:
                    raise ModuleNotFoundError(
                        f"No module named '{module_name}'; "
                        f"'{parent_name}' is not a package",
                        name=module_name,
                    )
                search_path = list(search)
            else:
                search_path = [str(root) for root in self.roots]

            spec = PathFinder.find_spec(module_name, search_path)
            if spec is None or spec.loader is None:
                raise ModuleNotFoundError(
                    f"No module named '{module_name}' under {self}",
                    name=module_name,
                )

            module = module_from_spec(spec)
            self._modules[module_name] = module
            try:
                self._exec_module(module_name, module)
            except BaseException:
                del self._modules[module_name]
                raise
            return module

    def _exec_module(self, module_name: str, module: ModuleType) -> None:
        top = module_name.partition(".")[0]

        def in_package(name: str) -> bool:
            return name == top or name.startswith(top + ".")

        shadowed = {n: m for n, m in list(sys.modules.items()) if in_package(n)}
        for name in shadowed:
            del sys.modules[name]
        sys.modules.update(
            {n: m for n, m in self._modules.items() if in_package(n)}
        )
        try:
            module.__spec__.loader.exec_module(module)  # type: ignore[union-attr]
        finally:
            imported = {
                n: m for n, m in list(sys.modules.items()) if in_package(n)
            }
            for name in imported:
                del sys.modules[name]
            sys.modules.update(shadowed)
        # Siblings pulled in by the module's own imports join the cache.
        self._modules.update(imported)

    def load_type(self, qualified_name: str) -> type:
        return load_by_import(qualified_name, self._import, self)

    def __repr__(self) -> str:
        roots = ", ".join(str(r) for r in self._roots)
        return f"PathProvider([{roots}])"


class SystemProvider(PathProvider):
    """The interpreter's own search path.

    Roots are read from ``sys.path`` on every call, and types are imported
    through the regular import system.
    """

    def __init__(self) -> None:
        super().__init__([])

    @property
    def roots(self) -> List[Path]:
        roots = []
        for entry in sys.path:
            root = Path(entry or os.getcwd())
            if root.is_dir():
                roots.append(root)
        return roots

    def load_type(self, qualified_name: str) -> type:
        return load_by_import(qualified_name, importlib.import_module, self)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SystemProvider)

    def __hash__(self) -> int:
        return hash(SystemProvider)

    def __repr__(self) -> str:
        return "SystemProvider(sys.path)"
