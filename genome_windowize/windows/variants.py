import numpy as np
import pandas as pd

from ..config import check_policy, OUT_OF_RANGE_POLICIES, ADVANCE_POLICIES
from ..exceptions import InvalidArgument
from ..utils.logging_utils import get_logger
from .window_table import window_ends, extend_table, out_of_range

logger = get_logger(__name__)


def as_positions(values, name: str = "positions") -> np.ndarray:
    """Coerce 1-based coordinates to an int64 array, rejecting non-integers and values below 1."""
    array = np.asarray(values)
    if array.size == 0:
        return np.zeros(0, dtype=np.int64)
    if array.dtype == bool or not np.issubdtype(array.dtype, np.number):
        raise InvalidArgument(f"{name} must be integer coordinates")
    if not np.all(np.isfinite(array)) or not np.all(np.mod(array, 1) == 0):
        raise InvalidArgument(f"{name} must be integer coordinates")
    array = array.astype(np.int64).ravel()
    if array.min() < 1:
        raise InvalidArgument(f"{name} are 1-based; found {int(array.min())}")
    return array


def aggregate_variants(table: pd.DataFrame, positions, on_out_of_range: str = "raise",
                       advance: str = "seek") -> pd.DataFrame:
    """
    Count variant positions per window with a forward-only cursor.

    ``advance="seek"`` moves the cursor while a position lies past the current
    window and then counts it. ``advance="step"`` keeps the single-step rule:
    a position past the current window moves the cursor one window and is not
    counted, so positions must be sorted and dense for the counts to be exact.
    Unsorted input is never re-sorted; a position behind the cursor is counted
    in the current window.
    """
    check_policy("on_out_of_range", on_out_of_range, OUT_OF_RANGE_POLICIES)
    check_policy("advance", advance, ADVANCE_POLICIES)
    ends = window_ends(table)
    positions = as_positions(positions)
    var_counts = np.zeros(len(ends), dtype=np.int64)

    last = len(ends) - 1
    window_num = 0
    for i, pos in enumerate(positions):
        if pos > ends[window_num]:
            if advance == "step":
                if window_num == last:
                    out_of_range(on_out_of_range,
                                 f"Variant position {int(pos):,} is past the last window end ({int(ends[last]):,})",
                                 len(positions) - i)
                    break
                window_num += 1
                continue
            while window_num < last and pos > ends[window_num]:
                window_num += 1
            if pos > ends[window_num]:
                out_of_range(on_out_of_range,
                             f"Variant position {int(pos):,} is past the last window end ({int(ends[last]):,})",
                             len(positions) - i)
                break
        var_counts[window_num] += 1

    logger.debug(f"Binned {int(var_counts.sum()):,} of {len(positions):,} variant positions")
    return extend_table(table, {"variants": var_counts})
