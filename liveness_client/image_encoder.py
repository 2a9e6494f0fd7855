"""Turn image files into data URIs accepted by the LiveDetection API."""
import base64
import logging

from liveness_client.errors import ImageError, UnsupportedImageTypeError
from liveness_client.sniff import detect_content_type

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = ("image/jpeg", "image/png")


def image_to_base64(path: str) -> str:
    """
    Read an image and return it as ``data:<mime>;base64,<payload>``.

    Args:
        path: Path of a JPEG or PNG file

    Returns:
        The data URI string

    Raises:
        ImageError: If the file cannot be read
        UnsupportedImageTypeError: If the content is not JPEG or PNG
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ImageError(path, str(e)) from e

    mime_type = detect_content_type(data)
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise UnsupportedImageTypeError(path, mime_type)

    logger.debug("Encoded %s as %s (%d bytes)", path, mime_type, len(data))
    return f"data:{mime_type};base64," + base64.b64encode(data).decode("ascii")
