"""Ambient provider accessors.

The context provider is held in a ``ContextVar`` so each thread and each
asyncio task sees its own binding. When nothing is bound, the interpreter's
search path (``SystemProvider``) is the context provider.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Iterator, Optional

from loaderchain.diagnostics import describe_for_log
from loaderchain.exceptions import NoProviderError
from loaderchain.providers.base import ResourceProvider
from loaderchain.providers.package import PackageProvider
from loaderchain.providers.path import PathProvider, SystemProvider
from loaderchain.utils.logging import configure_module_logger

logger = configure_module_logger(__name__, level=logging.INFO)

_SYSTEM_PROVIDER = SystemProvider()

_context_provider: ContextVar[Optional[ResourceProvider]] = ContextVar(
    "loaderchain_context_provider", default=None
)

_NO_FILE_ORIGINS = (None, "built-in", "frozen")


def current_context_provider() -> ResourceProvider:
    """Return the provider bound to the current execution context."""
    provider = _context_provider.get()
    if provider is None:
        provider = _SYSTEM_PROVIDER
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Context provider: {describe_for_log(provider)}")
    return provider


@contextmanager
def use_context_provider(provider: ResourceProvider) -> Iterator[ResourceProvider]:
    """Bind ``provider`` as the context provider for the enclosed block."""
    token = _context_provider.set(provider)
    try:
        yield provider
    finally:
        _context_provider.reset(token)


def _module_file(module: object) -> Optional[str]:
    spec = getattr(module, "__spec__", None)
    origin = getattr(spec, "origin", None)
    if origin not in _NO_FILE_ORIGINS:
        return origin
    return getattr(module, "__file__", None)


def provider_of(tp: type) -> ResourceProvider:
    """Return the provider that defined ``tp``.

    Types from a package map to a ``PackageProvider`` for the top-level
    package. Types from a top-level plain module map to a ``PathProvider``
    over the module's directory.

    Raises:
        NoProviderError: If the type is built in, comes from a module
            without a file, or its module is not imported.
    """
    module_name = getattr(tp, "__module__", None)
    type_name = getattr(tp, "__qualname__", repr(tp))
    if not module_name or module_name == "builtins":
        raise NoProviderError(
            f"Type '{type_name}' is built in and has no defining provider",
            type_name,
        )

    top_name = module_name.partition(".")[0]
    top_module = sys.modules.get(top_name)
    if top_module is None:
        raise NoProviderError(
            f"Module '{module_name}' of type '{type_name}' is not imported",
            type_name,
        )

    provider: ResourceProvider
    if hasattr(top_module, "__path__"):
        provider = PackageProvider(top_name)
    else:
        module_file = _module_file(top_module)
        if module_file is None:
            raise NoProviderError(
                f"Module '{module_name}' of type '{type_name}' has no file",
                type_name,
            )
        provider = PathProvider([Path(module_file).parent])

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"{tp.__name__} defining provider: {describe_for_log(provider)}"
        )
    return provider
