import os
import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from ..exceptions import InputError


def strip_chr(chrom: str) -> str:
    return chrom[3:] if chrom.startswith("chr") else chrom


def match_contig(chrom: str, available: Iterable[str], source: str) -> str:
    """
    Return the contig name in ``available`` that ``chrom`` refers to.

    Names are compared with and without a leading 'chr', so '1' finds 'chr1'
    and the other way round.
    """
    logger = logging.getLogger()
    available = list(available)
    if chrom in available:
        return chrom

    for name in available:
        if strip_chr(name) == strip_chr(chrom):
            logger.info(f"Contig '{chrom}' matched as '{name}' in {source}")
            return name

    logger.error(f"Contig '{chrom}' is missing from {source}. Contigs available:")
    for name in sorted(available)[:20]:
        logger.error(f"  > {name}")
    raise InputError(f"Contig '{chrom}' not found in {source}")


def check_input_file(path: str) -> str:
    if not os.path.exists(path):
        raise InputError(f"Input file not found: {path}")
    return path


def write_table(df: pd.DataFrame, path) -> Path:
    """Write an aggregation table as CSV, or TSV when the path ends in .tsv."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    sep = "\t" if path.suffix == ".tsv" else ","
    df.to_csv(path, sep=sep, index=False)
    return path
