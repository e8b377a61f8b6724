from typing import List, Tuple

import numpy as np
import pandas as pd

from ..config import check_policy, OUT_OF_RANGE_POLICIES
from ..exceptions import InvalidArgument
from ..utils.logging_utils import get_logger
from .variants import as_positions
from .window_table import window_ends, extend_table, out_of_range

logger = get_logger(__name__)


def interval_arrays(annotations) -> Tuple[np.ndarray, np.ndarray]:
    if isinstance(annotations, pd.DataFrame):
        missing = [col for col in ("start", "end") if col not in annotations.columns]
        if missing:
            raise InvalidArgument(f"Annotation table is missing columns: {', '.join(missing)}")
        starts, ends = annotations["start"].to_numpy(), annotations["end"].to_numpy()
    else:
        try:
            pairs = [tuple(pair) for pair in annotations]
        except TypeError:
            raise InvalidArgument("Annotations must be (start, end) pairs")
        if any(len(pair) != 2 for pair in pairs):
            raise InvalidArgument("Annotations must be (start, end) pairs")
        starts = [pair[0] for pair in pairs]
        ends = [pair[1] for pair in pairs]
    starts = as_positions(starts, "annotation starts")
    ends = as_positions(ends, "annotation ends")

    bad = np.flatnonzero(starts > ends)
    if bad.size:
        i = bad[0]
        raise InvalidArgument(f"Annotation interval has start > end: ({starts[i]}, {ends[i]})")
    return starts, ends


def merge_intervals(starts: np.ndarray, ends: np.ndarray) -> List[Tuple[int, int]]:
    """Union of 1-based inclusive intervals; overlapping and abutting intervals are joined."""
    merged = []
    for i in np.argsort(starts, kind="stable"):
        start, end = int(starts[i]), int(ends[i])
        if merged and start <= merged[-1][1] + 1:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def aggregate_annotations(table: pd.DataFrame, annotations, on_out_of_range: str = "raise") -> pd.DataFrame:
    """
    Count the positions of each window covered by at least one annotation.

    Intervals are 1-based and inclusive. They are merged before counting so
    overlapping annotations contribute each position once.

        >>> aggregate_annotations(build_windows(10, 20), [(5, 25)])["genic"].tolist()
        [6, 10, 5]
    """
    check_policy("on_out_of_range", on_out_of_range, OUT_OF_RANGE_POLICIES)
    win_ends = window_ends(table)
    win_starts = table["start"].to_numpy(dtype=np.int64)
    genic = np.zeros(len(win_ends), dtype=np.int64)
    covered = int(win_ends[-1])

    starts, ends = interval_arrays(annotations)
    merged = merge_intervals(starts, ends)

    overflow = [(start, end) for start, end in merged if end > covered]
    if overflow:
        dropped = sum(end - max(start, covered + 1) + 1 for start, end in overflow)
        start, end = overflow[0]
        out_of_range(on_out_of_range,
                     f"Annotation interval ({start:,}, {end:,}) extends past the last window end ({covered:,})",
                     dropped)
        merged = [(start, min(end, covered)) for start, end in merged if start <= covered]

    for start, end in merged:
        first = np.searchsorted(win_ends, start, side="left")
        last = np.searchsorted(win_ends, end, side="left")
        span = slice(first, last + 1)
        overlap = np.minimum(win_ends[span], end) - np.maximum(win_starts[span], start) + 1
        genic[span] += np.clip(overlap, 0, None)

    logger.debug(f"{len(merged):,} merged annotation interval(s) cover {int(genic.sum()):,} bp")
    return extend_table(table, {"genic": genic})
