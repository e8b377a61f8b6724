"""Readers turning FASTA, VCF and BED/GFF files into positional inputs for one contig."""

from .fasta_reader import read_sequence
from .vcf_reader import read_variant_positions, contig_length
from .annotation_reader import read_annotations

__all__ = [
    'read_sequence',
    'read_variant_positions',
    'contig_length',
    'read_annotations'
]
