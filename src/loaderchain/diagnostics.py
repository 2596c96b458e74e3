"""Diagnostic records describing a provider, for log output only."""

import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from loaderchain.providers.base import ResourceProvider


class DiagnosticRecord(BaseModel):
    """Snapshot of a provider: identity, concrete type and root locator.

    Serialised by alias, the keys are ``provider``, ``provider[type]`` and
    ``provider[root]``, in that order.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    provider: str = Field(alias="provider")
    provider_type: str = Field(alias="provider[type]")
    root: Optional[str] = Field(default=None, alias="provider[root]")

    def as_mapping(self) -> dict[str, Optional[str]]:
        return self.model_dump(by_alias=True)


def describe(provider: ResourceProvider) -> DiagnosticRecord:
    """Build the diagnostic record for ``provider``.

    The root is resolved by calling ``provider.get_resource("")`` directly,
    never through a resolver, so building a record emits no log lines.
    """
    cls = type(provider)
    root = provider.get_resource("")
    return DiagnosticRecord(
        provider=str(provider),
        provider_type=f"{cls.__module__}.{cls.__qualname__}",
        root=None if root is None else str(root),
    )


def format_record(record: DiagnosticRecord) -> str:
    """Render a record as compact JSON for a log line."""
    return json.dumps(record.as_mapping(), ensure_ascii=False)


def describe_for_log(provider: ResourceProvider) -> str:
    """Render ``provider`` for a log line without letting I/O errors escape.

    An ``OSError`` while resolving the root is reported in the
    ``provider[root]`` field instead of being raised.
    """
    try:
        record = describe(provider)
    except OSError as e:
        cls = type(provider)
        record = DiagnosticRecord(
            provider=str(provider),
            provider_type=f"{cls.__module__}.{cls.__qualname__}",
            root=f"<unavailable: {e}>",
        )
    return format_record(record)
