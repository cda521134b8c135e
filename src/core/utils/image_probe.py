"""Best-effort image dimension probing with Pillow."""

import io

from aws_lambda_powertools import Logger
from PIL import Image

logger = Logger(UTC=True)


def probe_dimensions(
    file_data: bytes,
    *,
    file_name: str | None = None,
) -> tuple[int | None, int | None]:
    """Return (width, height) of an image, or (None, None) if it can't be decoded.

    Only the image header is parsed; pixel data is never loaded.
    """
    try:
        with Image.open(io.BytesIO(file_data)) as image:
            width, height = image.size
            return int(width), int(height)
    except Exception as exc:
        logger.warning(
            "Could not extract image dimensions",
            extra={"file_name": file_name, "error": str(exc)},
        )
        return None, None
