"""Locator model: an opaque address of a located resource."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


class Locator(BaseModel):
    """Immutable URL-like reference to a located artifact.

    Two locators are equal when their ``url`` is equal.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str

    @classmethod
    def from_path(cls, path: Path) -> "Locator":
        """Build a ``file://`` locator for a filesystem path."""
        return cls(url=path.resolve().as_uri())

    @classmethod
    def from_zip_member(cls, archive: Any, member: str) -> "Locator":
        """Build a ``zip:<archive>!/<member>`` locator."""
        return cls(url=f"zip:{Path(archive).resolve()}!/{member}")

    def __str__(self) -> str:
        return self.url
