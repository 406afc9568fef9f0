"""Validation of the untrusted image query parameters."""

from typing import Any

from errors import ValidationError
from models import DEFAULT_IMAGE_SIZE, IMAGE_SIZES, ImageRequest

INVALID_PATH_MESSAGE = 'Invalid "path". It must start with "/".'


def validate_image_request(raw_path: Any, raw_size: Any = None, strict_sizes: bool = False) -> ImageRequest:
    """
    Turn the raw ``path``/``size`` query values into an ImageRequest.

    The path must be a string starting with "/" so it can only ever be
    appended to the image host, never replace it (``http://evil/x`` is
    rejected). An unknown size is passed through unchanged unless
    ``strict_sizes`` is set.
    """
    if not raw_path or not isinstance(raw_path, str) or not raw_path.startswith("/"):
        raise ValidationError(INVALID_PATH_MESSAGE)

    size = str(raw_size) if raw_size else DEFAULT_IMAGE_SIZE
    if strict_sizes and size not in IMAGE_SIZES:
        raise ValidationError(f'Invalid "size". Expected one of: {", ".join(sorted(IMAGE_SIZES))}.')

    return ImageRequest(path=raw_path, size=size)
