import base64
import binascii
import io
import re
from typing import Optional, Tuple
from PIL import Image, UnidentifiedImageError

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w=.+-]+)*;base64,", re.IGNORECASE)


class ImagePayloadError(ValueError):
    pass


def split_data_url(payload: str) -> Tuple[Optional[str], str]:
    """Return (declared mime type, base64 body) for plain base64 or a data URL."""
    payload = payload.strip()
    match = _DATA_URL.match(payload)
    if not match:
        return None, payload
    mime = match.group("mime")
    return (mime.lower() if mime else None), payload[match.end():]


def detect_mime_type(image_bytes: bytes) -> Optional[str]:
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            return Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        return None


def decode_image_payload(payload: str) -> Tuple[bytes, str]:
    """Decode a browser-supplied base64 image into (bytes, mime type).

    The declared type of a data URL wins; otherwise the bytes are sniffed with
    Pillow and JPEG is assumed when Pillow cannot tell.
    """
    declared, body = split_data_url(payload)
    try:
        image_bytes = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImagePayloadError(f"Invalid base64 image data: {e}") from e
    if not image_bytes:
        raise ImagePayloadError("Image data is empty")
    mime_type = declared or detect_mime_type(image_bytes) or "image/jpeg"
    return image_bytes, mime_type
