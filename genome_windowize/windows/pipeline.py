from typing import Optional

import numpy as np
import pandas as pd

from ..config import Config
from ..exceptions import InvalidArgument
from ..utils.logging_utils import get_logger
from .window_table import build_windows, WINDOW_COLUMNS
from .sequence import aggregate_sequence
from .variants import aggregate_variants, as_positions
from .annotations import aggregate_annotations, interval_arrays

logger = get_logger(__name__)


def infer_max_bp(sequence=None, positions=None, annotations=None) -> int:
    """Largest coordinate reached by any supplied input."""
    extents = []
    if sequence is not None and len(sequence) > 0:
        extents.append(len(sequence))
    if positions is not None:
        positions = as_positions(positions)
        if positions.size:
            extents.append(int(positions.max()))
    if annotations is not None:
        _, ends = interval_arrays(annotations)
        if ends.size:
            extents.append(int(ends.max()))
    if not extents:
        raise InvalidArgument("max_bp was not given and cannot be inferred from empty inputs")
    return max(extents)


def windowize_all(config: Config, sequence=None, positions=None, annotations=None,
                  max_bp: Optional[int] = None) -> pd.DataFrame:
    """
    Build the window table once and run every aggregation whose input is given.

    ``max_bp`` falls back to ``config.max_bp`` and then to the largest
    coordinate in the inputs. Count columns of each pass are joined onto a
    single table in the order sequence, variants, annotations.
    """
    if max_bp is None:
        max_bp = config.max_bp
    if max_bp is None:
        max_bp = infer_max_bp(sequence, positions, annotations)
    table = build_windows(config.window_size, max_bp)
    logger.info(f"Window table: {len(table):,} windows of {config.window_size:,} bp (max_bp {max_bp:,})")

    result = table.copy()
    passes = []
    if sequence is not None:
        passes.append(aggregate_sequence(table, sequence, on_out_of_range=config.on_out_of_range))
    if positions is not None:
        passes.append(aggregate_variants(table, positions, on_out_of_range=config.on_out_of_range,
                                         advance=config.variant_advance))
    if annotations is not None:
        passes.append(aggregate_annotations(table, annotations, on_out_of_range=config.on_out_of_range))

    for aggregated in passes:
        for col in aggregated.columns:
            if col not in WINDOW_COLUMNS:
                result[col] = aggregated[col].to_numpy(dtype=np.int64)
    return result
