"""Fixed-size window tables and per-window aggregation passes."""

from .window_table import build_windows, WINDOW_COLUMNS
from .sequence import aggregate_sequence, SEQUENCE_COLUMNS
from .variants import aggregate_variants
from .annotations import aggregate_annotations, merge_intervals
from .pipeline import windowize_all, infer_max_bp

__all__ = [
    'build_windows',
    'WINDOW_COLUMNS',
    'aggregate_sequence',
    'SEQUENCE_COLUMNS',
    'aggregate_variants',
    'aggregate_annotations',
    'merge_intervals',
    'windowize_all',
    'infer_max_bp'
]
