"""Type lookup helpers shared by the providers."""

from __future__ import annotations

import builtins
import importlib
from types import ModuleType
from typing import Any, Callable, Optional

from loaderchain.exceptions import TypeNotFoundError


def split_qualified_name(qualified_name: str) -> tuple[str, str]:
    """Split ``pkg.mod.Outer.Inner`` at the last dot.

    Returns:
        ``(module_part, attribute_part)``; the module part is empty for a
        bare name.
    """
    module_name, _, attr = qualified_name.rpartition(".")
    return module_name, attr


def resolve_attribute(
    module: ModuleType, attr_path: str, qualified_name: str, provider: Any = None
) -> type:
    """Walk ``attr_path`` inside ``module`` and return the type it names.

    Raises:
        TypeNotFoundError: If an attribute is missing or is not a type.
    """
    obj: Any = module
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise TypeNotFoundError(
                f"Type '{qualified_name}' not found: "
                f"'{module.__name__}' has no attribute path '{attr_path}'",
                qualified_name,
                provider,
            ) from e
    if not isinstance(obj, type):
        raise TypeNotFoundError(
            f"'{qualified_name}' resolves to a {type(obj).__name__}, not a type",
            qualified_name,
            provider,
        )
    return obj


def _is_prefix(candidate: str, module_name: str) -> bool:
    return module_name == candidate or module_name.startswith(candidate + ".")


def load_by_import(
    qualified_name: str,
    import_module: Callable[[str], ModuleType],
    provider: Any = None,
) -> type:
    """Find the longest importable module prefix and resolve the rest.

    ``pkg.mod.Outer.Inner`` tries ``pkg.mod.Outer`` first, then ``pkg.mod``
    with attribute path ``Outer.Inner``, and so on.

    Raises:
        TypeNotFoundError: If no prefix imports or the attribute is missing.
    """
    parts = qualified_name.split(".")
    if len(parts) < 2 or not all(parts):
        raise TypeNotFoundError(
            f"'{qualified_name}' is not a dotted module.Type name",
            qualified_name,
            provider,
        )

    last_error: Optional[ModuleNotFoundError] = None
    for split_at in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split_at])
        try:
            module = import_module(module_name)
        except ModuleNotFoundError as e:
            # A missing dependency inside an existing module is a real error.
            if e.name and not _is_prefix(e.name, module_name):
                raise
            last_error = e
            continue
        return resolve_attribute(
            module, ".".join(parts[split_at:]), qualified_name, provider
        )

    raise TypeNotFoundError(
        f"Type '{qualified_name}' not found: no importable module prefix",
        qualified_name,
        provider,
    ) from last_error


def locate_type(qualified_name: str) -> type:
    """Global, context-independent type lookup.

    Bare names (``int``) and ``builtins.*`` names resolve against the
    ``builtins`` module, which no provider covers. Dotted names go through
    ``importlib.import_module``.

    Raises:
        TypeNotFoundError: If the name cannot be resolved.
    """
    module_name, attr = split_qualified_name(qualified_name)
    if not module_name or module_name == "builtins":
        return resolve_attribute(builtins, attr or qualified_name, qualified_name)
    return load_by_import(qualified_name, importlib.import_module)
