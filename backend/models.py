"""Pydantic models shared across the application."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ── Image models ────────────────────────────────────────────────

IMAGE_SIZES = frozenset({"w92", "w154", "w185", "w342", "w500", "w780", "original"})
DEFAULT_IMAGE_SIZE = "w500"


class ImageRequest(BaseModel):
    """Validated image lookup: a host-less path plus a TMDB size segment."""
    model_config = ConfigDict(frozen=True)

    path: str  # always starts with "/"
    size: str = DEFAULT_IMAGE_SIZE


class RelayOutcome(str, Enum):
    COMPLETED = "completed"
    UPSTREAM_FAILED = "upstream_failed"
    CLIENT_DISCONNECTED = "client_disconnected"


# ── Upstream models ─────────────────────────────────────────────

class UpstreamTarget(BaseModel):
    """A single outbound request, fixed once built."""
    model_config = ConfigDict(frozen=True)

    url: str
    method: str = "GET"
    headers: dict[str, str] = Field(default_factory=dict)
    params: dict[str, str] = Field(default_factory=dict)
