import numpy as np
import pandas as pd

from ..config import check_positive_int
from ..exceptions import InvalidArgument, OutOfRange
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

WINDOW_COLUMNS = ["index", "start", "end", "length"]


def build_windows(window_size: int, max_bp: int) -> pd.DataFrame:
    """
    Build the table of fixed-size windows covering positions 1..max_bp.

    One window more than ``max_bp // window_size`` is always allocated, so the
    last window may end past ``max_bp`` (and lie entirely beyond it when
    ``max_bp`` is an exact multiple of ``window_size``). Lengths are never clipped.

        >>> build_windows(5, 10)
           index  start  end  length
        0      1      1    5       5
        1      2      6   10       5
        2      3     11   15       5
    """
    window_size = check_positive_int("window_size", window_size)
    max_bp = check_positive_int("max_bp", max_bp)

    n_windows = max_bp // window_size + 1
    offsets = np.arange(n_windows, dtype=np.int64)
    table = pd.DataFrame({
        "index": offsets + 1,
        "start": offsets * window_size + 1,
        "end": (offsets + 1) * window_size,
        "length": np.full(n_windows, window_size, dtype=np.int64),
    })
    logger.debug(f"Built {n_windows:,} windows of {window_size:,} bp covering 1-{max_bp:,}")
    return table


def window_ends(table: pd.DataFrame) -> np.ndarray:
    """Validate a window table and return its ``end`` column as an int64 array."""
    if not isinstance(table, pd.DataFrame):
        raise InvalidArgument(f"Window table must be a DataFrame, got {type(table).__name__}")
    missing = [col for col in WINDOW_COLUMNS if col not in table.columns]
    if missing:
        raise InvalidArgument(f"Window table is missing columns: {', '.join(missing)}")
    if table.empty:
        raise InvalidArgument("Window table has no windows")
    return table["end"].to_numpy(dtype=np.int64)


def extend_table(table: pd.DataFrame, columns: dict) -> pd.DataFrame:
    """Return a copy of ``table`` with the count ``columns`` appended."""
    result = table.copy()
    for name, values in columns.items():
        result[name] = np.asarray(values, dtype=np.int64)
    return result


def out_of_range(policy: str, message: str, dropped: int):
    """Raise OutOfRange, or log a warning when the drop policy is in effect."""
    if policy == "raise":
        raise OutOfRange(message)
    logger.warning(f"{message}; dropped {dropped:,} item(s) beyond the last window")
