"""License inventory models -- the payload served as /licenses.json."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class LicensePackage(BaseModel):
    """One installed distribution and its declared license."""

    name: str
    version: str
    license: str = "UNKNOWN"
    repository: str | None = None
    url: str | None = None
    publisher: str | None = None
    email: str | None = None

    @property
    def id(self) -> str:
        return f"{self.name}@{self.version}"


class LicensesPayload(BaseModel):
    """The full inventory written at build time."""

    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total: int = 0
    by_license: dict[str, int] = Field(default_factory=dict)
    packages: list[LicensePackage] = Field(default_factory=list)
