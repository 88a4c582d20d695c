"""Core image processing utilities."""
from .config import PuzzleConfig, DEFAULT_CONFIG
from .image_utils import IngestionError, decode_image, encode_image, load_image_bgr, save_image
from .splitting import split_image_to_tiles, write_tiles
