"""Ordered fallback resolution of resources and types.

Resources are looked up across three providers, first match wins:
1. The context provider (bound to the current thread / task)
2. The provider that defined loaderchain itself
3. The provider that defined the calling type

Types are loaded across four tiers, moving on only when a tier raises
``TypeNotFoundError``:
1. The context provider
2. The global lookup (``locate_type``), which also sees builtins
3. The provider that defined loaderchain itself
4. The provider that defined the calling type

The candidate chain is rebuilt on every call; nothing is cached.
"""

import logging
from typing import BinaryIO, Callable, List, Optional, Tuple

from loaderchain.config import ResolverConfig
from loaderchain.context import current_context_provider, provider_of
from loaderchain.diagnostics import describe_for_log
from loaderchain.exceptions import ResourceIOError, TypeNotFoundError
from loaderchain.locator import Locator
from loaderchain.providers.base import ResourceProvider
from loaderchain.providers.typeload import locate_type
from loaderchain.streams import open_stream
from loaderchain.utils.logging import configure_module_logger

logger = configure_module_logger(__name__, level=logging.INFO)

ProviderThunk = Callable[[], ResourceProvider]


class Resolver:
    """Locate resources and load types across an ordered provider chain.

    All host accessors are injectable so the chain can be driven by
    substitute providers.

    Args:
        config: Resolver configuration (defaults to ``ResolverConfig()``).
        own_provider: Provider treated as loaderchain's own. Defaults to
            ``provider_of(Resolver)``, evaluated per call.
        context_provider: Accessor for the ambient context provider.
        provider_of: Accessor mapping a type to its defining provider.
        type_locator: Global, provider-independent type lookup.
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        own_provider: Optional[ResourceProvider] = None,
        context_provider: ProviderThunk = current_context_provider,
        provider_of: Callable[[type], ResourceProvider] = provider_of,
        type_locator: Callable[[str], type] = locate_type,
    ) -> None:
        self.config = config or ResolverConfig()
        self._own_provider = own_provider
        self._context_provider = context_provider
        self._provider_of = provider_of
        self._type_locator = type_locator

    def own_provider(self) -> ResourceProvider:
        """Provider of the resolver's own defining context."""
        if self._own_provider is not None:
            return self._own_provider
        return self._provider_of(Resolver)

    def context_provider(self) -> ResourceProvider:
        """Provider bound to the current execution context."""
        return self._context_provider()

    def provider_of(self, tp: type) -> ResourceProvider:
        """Provider that defined ``tp``; ``NoProviderError`` propagates."""
        return self._provider_of(tp)

    def _chain(self, calling_type: type) -> List[Tuple[str, ProviderThunk]]:
        return [
            ("context", self.context_provider),
            ("loaderchain", self.own_provider),
            ("caller", lambda: self.provider_of(calling_type)),
        ]

    def get_resource_from(
        self, provider: ResourceProvider, name: str
    ) -> Optional[Locator]:
        """Look ``name`` up in a single provider, without fallback or logging."""
        return provider.get_resource(name)

    def get_class_path(
        self, provider: Optional[ResourceProvider] = None
    ) -> Optional[Locator]:
        """Root locator of ``provider`` (default: the resolver's own provider)."""
        return self.get_resource_from(provider or self.own_provider(), "")

    def get_resource(
        self, name: str, calling_type: Optional[type] = None
    ) -> Optional[Locator]:
        """Locate a resource.

        Without ``calling_type`` only the resolver's own provider is asked.
        With it, the three-tier chain is walked and every step is logged.

        Args:
            name: Slash-separated resource name.
            calling_type: Type of the code asking for the resource.

        Returns:
            Locator from the first provider that holds the resource, or None.
        """
        if calling_type is None:
            return self.get_resource_from(self.own_provider(), name)

        for label, get_provider in self._chain(calling_type):
            provider = get_provider()
            locator = provider.get_resource(name)
            if locator is not None:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        f"Found resource '{name}' in {label} provider: "
                        f"{describe_for_log(provider)}"
                    )
                return locator
            logger.warning(
                f"Resource '{name}' not found in {label} provider: "
                f"{describe_for_log(provider)}"
            )

        logger.warning(f"Resource '{name}' not found in any provider")
        return None

    def get_resources(self, name: str, calling_type: type) -> List[Locator]:
        """Locate every resource named ``name`` in the first provider that has any.

        An empty list from a provider counts as absent unless
        ``config.empty_resources_fall_through`` is False, in which case only
        a None result moves on to the next provider.

        Raises:
            ResourceIOError: If a provider fails with ``OSError``. Later
                providers are not consulted.
        """
        for label, get_provider in self._chain(calling_type):
            provider = get_provider()
            try:
                found = provider.get_resources(name)
            except OSError as e:
                raise ResourceIOError(
                    f"I/O error listing resource '{name}' in {label} provider "
                    f"{provider}: {e}",
                    name,
                ) from e

            absent = found is None or (
                not found and self.config.empty_resources_fall_through
            )
            if not absent:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        f"Found {len(found)} resource(s) '{name}' in {label} "
                        f"provider: {describe_for_log(provider)}"
                    )
                return list(found)
            logger.warning(
                f"Resources '{name}' not found in {label} provider: "
                f"{describe_for_log(provider)}"
            )

        logger.warning(f"Resources '{name}' not found in any provider")
        return []

    def get_resource_as_stream(
        self, name: str, calling_type: type
    ) -> Optional[BinaryIO]:
        """Locate ``name`` with the three-tier chain and open it.

        Returns:
            Open binary stream (caller closes it), or None if absent.

        Raises:
            ResourceIOError: If the located resource cannot be opened.
        """
        locator = self.get_resource(name, calling_type)
        if locator is None:
            return None
        try:
            return open_stream(locator)
        except OSError as e:
            raise ResourceIOError(
                f"Cannot open resource '{name}' at {locator}: {e}", name
            ) from e

    def load_type(self, qualified_name: str, calling_type: type) -> type:
        """Load a type by name through the four-tier chain.

        Only ``TypeNotFoundError`` moves on to the next tier; any other
        exception propagates at once.

        Raises:
            TypeNotFoundError: The error raised by the last tier, unchanged.
        """
        loaders: List[Callable[[], type]] = [
            lambda: self.context_provider().load_type(qualified_name),
            lambda: self._type_locator(qualified_name),
            lambda: self.own_provider().load_type(qualified_name),
            lambda: self.provider_of(calling_type).load_type(qualified_name),
        ]

        last_error: Optional[TypeNotFoundError] = None
        for load in loaders:
            try:
                return load()
            except TypeNotFoundError as e:
                last_error = e

        assert last_error is not None
        raise last_error

    def __repr__(self) -> str:
        return f"Resolver(own_provider={self._own_provider!r})"
