"""TMDB request builders — the credential is added server-side only."""

from config import Settings
from models import ImageRequest, UpstreamTarget


def now_playing_target(settings: Settings, page: int | float) -> UpstreamTarget:
    """Target for the "Now Playing" listing, one page at a time."""
    return UpstreamTarget(
        url=f"{settings.tmdb_api_base.rstrip('/')}/movie/now_playing",
        headers={"Accept": "application/json"},
        params={
            "api_key": settings.tmdb_api_key,
            "language": settings.tmdb_language,
            "page": str(page),
        },
    )


def image_target(settings: Settings, image: ImageRequest) -> UpstreamTarget:
    # path is validated to start with "/", so the host below is never replaced
    return UpstreamTarget(
        url=f"{settings.tmdb_image_base.rstrip('/')}/t/p/{image.size}{image.path}",
        headers={"Accept": "image/*"},
    )
