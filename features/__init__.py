"""Feature extraction modules."""
from .edges import SIDES, extract_edge_strip, compute_edge_hash, compute_edge_hashes
from .artifacts import Piece, UNRESOLVED
