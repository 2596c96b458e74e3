"""Base abstract class for resource providers.

A provider locates resources and loads types from one search scope. The
resolver never constructs providers for lookups; it only calls them.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from loaderchain.locator import Locator


class ResourceProvider(ABC):
    """Abstract base class for all resource providers.

    ``str(provider)`` is used as the provider's identity in diagnostics.
    """

    @abstractmethod
    def get_resource(self, name: str) -> Optional[Locator]:
        """Locate a single resource.

        Args:
            name: Slash-separated resource name relative to the provider's
                root. The empty string names the root itself.

        Returns:
            Locator of the resource, or None when the provider does not
            hold it.
        """
        ...

    @abstractmethod
    def get_resources(self, name: str) -> List[Locator]:
        """Locate every resource with the given name, in search order.

        Args:
            name: Slash-separated resource name.

        Returns:
            List of locators, empty when nothing matches.

        Raises:
            OSError: If the underlying storage cannot be read.
        """
        ...

    @abstractmethod
    def load_type(self, qualified_name: str) -> type:
        """Load a type by its dotted ``module.Qualname`` name.

        Args:
            qualified_name: Fully-qualified type name.

        Returns:
            The loaded type.

        Raises:
            TypeNotFoundError: If the provider cannot load the type.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
