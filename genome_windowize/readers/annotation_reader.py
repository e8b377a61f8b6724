import pandas as pd

from ..exceptions import InputError
from ..utils.file_utils import check_input_file, strip_chr
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)

GFF_SUFFIXES = (".gff", ".gff3", ".gtf")


def _is_gff(path: str) -> bool:
    name = path.lower()
    if name.endswith(".gz"):
        name = name[:-3]
    return name.endswith(GFF_SUFFIXES)


def read_annotations(path: str, chrom: str, feature: str = None) -> pd.DataFrame:
    """
    Read annotated intervals on ``chrom`` from a BED or GFF/GTF file.

    Returns a DataFrame with 1-based inclusive ``start``/``end`` columns. BED
    starts are 0-based and shifted by one; GFF coordinates are used as is.
    ``feature`` keeps only GFF rows of that type (column 3) and is ignored
    for BED input.
    """
    check_input_file(path)
    gff = _is_gff(path)
    usecols = [0, 2, 3, 4] if gff else [0, 1, 2]
    names = ["chrom", "feature", "start", "end"] if gff else ["chrom", "start", "end"]
    try:
        df = pd.read_csv(path, sep="\t", header=None, comment="#", usecols=usecols,
                         names=names, dtype={"chrom": str})
    except pd.errors.EmptyDataError:
        df = pd.DataFrame(columns=names)
    except (OSError, ValueError) as e:
        raise InputError(f"Failed to parse annotation file {path}: {e}")

    if not gff:
        df = df[~df["chrom"].str.startswith(("track", "browser"), na=False)]
    df = df[df["chrom"].map(lambda c: strip_chr(str(c))) == strip_chr(chrom)]
    if gff and feature is not None:
        df = df[df["feature"] == feature]

    try:
        intervals = pd.DataFrame({
            "start": df["start"].astype("int64") + (0 if gff else 1),
            "end": df["end"].astype("int64"),
        }).reset_index(drop=True)
    except (TypeError, ValueError) as e:
        raise InputError(f"Non-integer coordinates in annotation file {path}: {e}")

    if intervals.empty:
        logger.warning(f"No annotations found on contig '{chrom}' in {path}")
    else:
        logger.info(f"Read {len(intervals):,} annotation intervals on '{chrom}' from {path}")
    return intervals
