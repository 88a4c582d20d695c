"""Low-level image operations."""

from io import BytesIO
from pathlib import Path

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError


class IngestionError(ValueError):
    """A tile could not be read or decoded; the puzzle cannot be assembled."""


def decode_image(raw: bytes, name: str = "<bytes>") -> np.ndarray:
    """
    Decode encoded image bytes into a BGR uint8 array.

    Args:
        raw: Encoded image file contents
        name: Label used in error messages

    Returns:
        Array of shape (H, W, 3)

    Raises:
        IngestionError: If the bytes are not a decodable image
    """
    try:
        with Image.open(BytesIO(raw)) as pic:
            rgb = np.array(pic.convert("RGB"))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        raise IngestionError(f"Could not decode image {name}: {e}") from e
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)


def load_image_bgr(file_path) -> np.ndarray:
    """Read and decode an image file (BGR format)."""
    try:
        raw = Path(file_path).read_bytes()
    except OSError as e:
        raise IngestionError(f"Could not read image {file_path}: {e}") from e
    return decode_image(raw, str(file_path))


def encode_image(image: np.ndarray, ext: str = ".jpg") -> bytes:
    """Encode a BGR array into image file bytes of the given format."""
    ok, buffer = cv2.imencode(ext, image)
    if not ok:
        raise ValueError(f"Could not encode image as {ext}")
    return buffer.tobytes()


def save_image(image: np.ndarray, output_path) -> Path:
    """Encode image by file extension and write it, creating parent dirs."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(encode_image(image, output_path.suffix or ".jpg"))
    return output_path


def to_grayscale(image):
    """Convert BGR image to grayscale."""
    if len(image.shape) == 2:
        return image
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
