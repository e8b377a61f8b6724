import numpy as np
import pandas as pd

from ..config import check_policy, OUT_OF_RANGE_POLICIES
from ..utils.logging_utils import get_logger
from .window_table import window_ends, extend_table, out_of_range

logger = get_logger(__name__)

BASES = ["A", "C", "G", "T", "N"]
SEQUENCE_COLUMNS = BASES + ["other"]


def _symbols(sequence) -> np.ndarray:
    """
    Upper-cased symbols of ``sequence`` as a one-byte-per-base array.

    Non-ASCII characters and multi-character entries become '?', which
    counts as other.
    """
    if not isinstance(sequence, str):
        sequence = "".join(s if len(s) == 1 else "?" for s in map(str, sequence))
    return np.frombuffer(sequence.encode("ascii", errors="replace").upper(), dtype="S1")


def aggregate_sequence(table: pd.DataFrame, sequence, on_out_of_range: str = "raise") -> pd.DataFrame:
    """
    Count A, C, G, T, N and other symbols per window.

    The sequence is taken to start at position 1. Each position ``p`` lands in
    the first window whose ``end`` is not below ``p``, which is where a
    forward-only cursor advanced while ``p > end`` would stop; windows are
    counted as consecutive slices of the sequence split at their ends.
    Positions beyond the last window are handled by ``on_out_of_range``.
    """
    check_policy("on_out_of_range", on_out_of_range, OUT_OF_RANGE_POLICIES)
    ends = window_ends(table)
    counts = {col: np.zeros(len(ends), dtype=np.int64) for col in SEQUENCE_COLUMNS}

    if len(sequence) == 0:
        logger.debug("Empty sequence; all composition counts are zero")
        return extend_table(table, counts)

    symbols = _symbols(sequence)
    covered = int(ends[-1])
    if len(symbols) > covered:
        out_of_range(on_out_of_range,
                     f"Sequence of {len(symbols):,} bp extends past the last window end ({covered:,})",
                     len(symbols) - covered)
        symbols = symbols[:covered]

    # Windows are contiguous, so each used window is one non-empty slice
    used = int(np.searchsorted(ends, len(symbols), side="left")) + 1
    offsets = np.concatenate(([0], ends[:used - 1]))

    other = np.ones(len(symbols), dtype=bool)
    for base in BASES:
        mask = symbols == base.encode("ascii")
        other &= ~mask
        counts[base][:used] = np.add.reduceat(mask, offsets, dtype=np.int64)
    counts["other"][:used] = np.add.reduceat(other, offsets, dtype=np.int64)

    logger.debug(f"Binned {len(symbols):,} bp into {len(ends):,} windows")
    return extend_table(table, counts)
