from Bio import SeqIO

from ..exceptions import InputError
from ..utils.file_utils import check_input_file, match_contig
from ..utils.logging_utils import get_logger

logger = get_logger(__name__)


def read_sequence(fasta_path: str, chrom: str) -> str:
    """
    Return the sequence of contig ``chrom`` from a FASTA file, case preserved.

    The file is indexed rather than parsed whole, so only the requested
    contig is held in memory.
    """
    check_input_file(fasta_path)
    try:
        records = SeqIO.index(fasta_path, "fasta")
    except (OSError, ValueError) as e:
        raise InputError(f"Failed to index FASTA file {fasta_path}: {e}")
    try:
        if len(records) == 0:
            raise InputError(f"No sequences found in FASTA file: {fasta_path}")
        name = match_contig(chrom, list(records), fasta_path)
        sequence = str(records[name].seq)
    finally:
        records.close()
    logger.info(f"Read {len(sequence):,} bp for contig '{name}' from {fasta_path}")
    return sequence
