"""Render descriptors handed to the map surface."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyskytrack.models.viewport import GeoPosition


class PopupKind(StrEnum):
    LOADING = "loading"
    PHOTO = "photo"
    DETAILS = "details"


class PopupContent(BaseModel):
    """Popup body for one marker.

    ``lines`` always carries the aircraft details; ``image_url``,
    ``author`` and ``photo_link`` are only set for :attr:`PopupKind.PHOTO`.
    """

    model_config = ConfigDict(frozen=True)

    kind: PopupKind
    title: str
    lines: tuple[str, ...] = ()
    image_url: str | None = None
    author: str | None = None
    photo_link: str | None = None


class MarkerDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Registration, or '#<index>' for unregistered targets")
    position: GeoPosition
    heading: float
    heading_icon: str
    popup: PopupContent
