from __future__ import annotations
import io
import logging

logger = logging.getLogger(__name__)

def can_decode(data: bytes) -> bool:
    """
    True if Pillow can open and fully load the image.
    A decent estimate of not having corrupted it beyond being an image anymore,
    though other readers may be more or less forgiving.
    """
    from PIL import Image  # only needed when validating

    try:
        with Image.open(io.BytesIO(data)) as im:
            im.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        logger.debug("Pillow rejected candidate: %s", e)
        return False
    return True
