"""Resource providers for loaderchain.

Provides the ResourceProvider abstract base class and the host
providers: package-anchored, directory-list and interpreter search path.
"""

from loaderchain.providers.base import ResourceProvider
from loaderchain.providers.package import PackageProvider
from loaderchain.providers.path import PathProvider, SystemProvider
from loaderchain.providers.typeload import locate_type

__all__ = [
    "PackageProvider",
    "PathProvider",
    "ResourceProvider",
    "SystemProvider",
    "locate_type",
]
