"""Enrichment (photo/author) models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyskytrack._constants import UNKNOWN_AUTHOR


class EnrichmentStatus(StrEnum):
    PENDING = "pending"
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not EnrichmentStatus.PENDING


class PhotoCredit(BaseModel):
    """A lookup answer from the enrichment collaborator.

    Either field may be missing when the search page only partially
    matched; such credits count as "not found".
    """

    model_config = ConfigDict(frozen=True)

    image_url: str | None = None
    author: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.image_url and self.image_url.strip() and self.author and self.author.strip())


class EnrichmentRecord(BaseModel):
    """Cached enrichment state for one registration."""

    model_config = ConfigDict(frozen=True)

    registration: str
    image_url: str | None = None
    author: str = UNKNOWN_AUTHOR
    status: EnrichmentStatus = EnrichmentStatus.PENDING
    error: str | None = Field(default=None, description="Failure reason for failed lookups.")

    @classmethod
    def pending(cls, registration: str) -> EnrichmentRecord:
        return cls(registration=registration)

    @classmethod
    def found(cls, registration: str, credit: PhotoCredit) -> EnrichmentRecord:
        return cls(
            registration=registration,
            image_url=(credit.image_url or "").strip(),
            author=(credit.author or "").strip(),
            status=EnrichmentStatus.FOUND,
        )

    @classmethod
    def not_found(cls, registration: str) -> EnrichmentRecord:
        return cls(registration=registration, status=EnrichmentStatus.NOT_FOUND)

    @classmethod
    def failed(cls, registration: str, error: str | None = None) -> EnrichmentRecord:
        return cls(registration=registration, status=EnrichmentStatus.FAILED, error=error)
