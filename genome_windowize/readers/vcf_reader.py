from typing import Optional

import numpy as np
import pysam
from tqdm import tqdm

from ..exceptions import InputError
from ..utils.file_utils import check_input_file, match_contig, strip_chr
from ..utils.logging_utils import get_logger, log_tqdm_summary

logger = get_logger(__name__)


def _open_vcf(vcf_path: str):
    check_input_file(vcf_path)
    try:
        return pysam.VariantFile(vcf_path)
    except (OSError, ValueError) as e:
        raise InputError(f"Failed to open VCF file: {str(e)}")


def contig_length(vcf_path: str, chrom: str) -> Optional[int]:
    """Length of ``chrom`` from the ##contig header lines, or None when not declared."""
    with _open_vcf(vcf_path) as vcf:
        contigs = vcf.header.contigs
        if not contigs:
            return None
        try:
            name = match_contig(chrom, list(contigs), vcf_path)
        except InputError:
            return None
        return contigs[name].length


def read_variant_positions(vcf_path: str, chrom: str) -> np.ndarray:
    """
    Collect the POS of every record on ``chrom``, sorted ascending.

    Records are streamed without an index, so plain and bgzipped VCFs both
    work. A contig declared in the header without records gives an empty
    array. Contig names are compared with and without a 'chr' prefix.
    """
    target = strip_chr(chrom)
    positions = []
    seen = set()
    with _open_vcf(vcf_path) as vcf:
        declared = list(vcf.header.contigs)
        with tqdm(desc="Reading variants", unit="records") as pbar:
            for record in vcf:
                seen.add(record.chrom)
                if strip_chr(record.chrom) == target:
                    positions.append(record.pos)
                pbar.update(1)
        log_tqdm_summary(pbar, logger)

    known = seen | set(declared)
    if known and target not in {strip_chr(name) for name in known}:
        raise InputError(f"Contig '{chrom}' not found in {vcf_path}; "
                         f"contigs present: {', '.join(sorted(known))}")
    if not positions:
        logger.warning(f"No variants found on contig '{chrom}' in {vcf_path}")

    positions = np.sort(np.asarray(positions, dtype=np.int64))
    logger.info(f"Read {len(positions):,} variant positions on '{chrom}'")
    return positions
