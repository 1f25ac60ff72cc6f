from io import BytesIO
from typing import Optional, Tuple

from PIL import Image


def decode_image(data: bytes) -> Image.Image:
    image = Image.open(BytesIO(data))
    image.load()
    return image


def fit_within(image: Image.Image, box: Tuple[int, int]) -> Image.Image:
    """Shrink to fit inside ``box`` keeping the aspect ratio; never enlarges"""
    resized = image.copy()
    resized.thumbnail(box)
    return resized


def encode_image(image: Image.Image, image_format: Optional[str]) -> bytes:
    output = BytesIO()
    image.save(output, format=image_format or "PNG")
    return output.getvalue()
