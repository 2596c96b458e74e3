"""Exception hierarchy for loaderchain.

A missing resource is never an exception: lookups return ``None`` or an
empty list. Exceptions are reserved for missing types, genuine I/O faults
and types that have no defining provider.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from loaderchain.providers.base import ResourceProvider


class LoaderChainError(Exception):
    """Base class for all loaderchain errors."""


class TypeNotFoundError(LoaderChainError, LookupError):
    """Raised when a provider cannot load a type by its qualified name."""

    def __init__(
        self,
        message: str,
        type_name: str,
        provider: Optional["ResourceProvider"] = None,
    ) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.provider = provider


class ResourceIOError(LoaderChainError, OSError):
    """Raised when storage access fails while locating or opening a resource.

    Always raised ``from`` the underlying ``OSError``.
    """

    def __init__(self, message: str, resource_name: str) -> None:
        super().__init__(message)
        self.resource_name = resource_name


class NoProviderError(LoaderChainError):
    """Raised when a type has no defining provider (builtins, frozen modules)."""

    def __init__(self, message: str, type_name: str) -> None:
        super().__init__(message)
        self.type_name = type_name
