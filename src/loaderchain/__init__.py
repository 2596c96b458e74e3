from typing import BinaryIO, List, Optional

from loaderchain._version import __version__
from loaderchain.config import ResolverConfig, load_config
from loaderchain.context import (
    current_context_provider,
    provider_of,
    use_context_provider,
)
from loaderchain.diagnostics import DiagnosticRecord, describe, format_record
from loaderchain.exceptions import (
    LoaderChainError,
    NoProviderError,
    ResourceIOError,
    TypeNotFoundError,
)
from loaderchain.locator import Locator
from loaderchain.providers import (
    PackageProvider,
    PathProvider,
    ResourceProvider,
    SystemProvider,
    locate_type,
)
from loaderchain.resolver import Resolver
from loaderchain.utils.logging import reconfigure_package_loggers

__all__ = [
    "__version__",
    "DiagnosticRecord",
    "LoaderChainError",
    "Locator",
    "NoProviderError",
    "PackageProvider",
    "PathProvider",
    "ResourceIOError",
    "ResourceProvider",
    "Resolver",
    "ResolverConfig",
    "SystemProvider",
    "TypeNotFoundError",
    "current_context_provider",
    "describe",
    "format_record",
    "get_class_path",
    "get_resolver",
    "get_resource",
    "get_resource_as_stream",
    "get_resources",
    "load_config",
    "load_type",
    "locate_type",
    "provider_of",
    "use_context_provider",
]

_RESOLVER_INSTANCE: Optional[Resolver] = None


def get_resolver(config: Optional[ResolverConfig] = None) -> Resolver:
    """Get or create the process-wide Resolver.

    When called without arguments, returns a singleton built from
    ``load_config()``. When called with a config, builds a dedicated
    instance. Either way the loaderchain loggers are reconfigured to
    match the config.

    Args:
        config: Optional explicit configuration.

    Returns:
        Resolver instance.
    """
    global _RESOLVER_INSTANCE

    if config is not None:
        reconfigure_package_loggers(config.level, use_colors=config.rich_logging)
        return Resolver(config=config)

    if _RESOLVER_INSTANCE is None:
        loaded = load_config()
        reconfigure_package_loggers(loaded.level, use_colors=loaded.rich_logging)
        _RESOLVER_INSTANCE = Resolver(config=loaded)
    return _RESOLVER_INSTANCE


def get_resource(name: str, calling_type: Optional[type] = None) -> Optional[Locator]:
    """Locate a resource with the default resolver.

    See ``Resolver.get_resource``.
    """
    return get_resolver().get_resource(name, calling_type)


def get_resources(name: str, calling_type: type) -> List[Locator]:
    """Locate every match of a resource with the default resolver."""
    return get_resolver().get_resources(name, calling_type)


def get_resource_as_stream(name: str, calling_type: type) -> Optional[BinaryIO]:
    """Locate and open a resource with the default resolver."""
    return get_resolver().get_resource_as_stream(name, calling_type)


def get_class_path(provider: Optional[ResourceProvider] = None) -> Optional[Locator]:
    """Root locator of ``provider`` (default: loaderchain's own provider)."""
    return get_resolver().get_class_path(provider)


def load_type(qualified_name: str, calling_type: type) -> type:
    """Load a type by name with the default resolver."""
    return get_resolver().load_type(qualified_name, calling_type)
