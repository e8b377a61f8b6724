import time
import datetime
from pathlib import Path

import click

from .config import Config, OUT_OF_RANGE_POLICIES, ADVANCE_POLICIES
from .exceptions import WindowizeError
from .readers import read_sequence, read_variant_positions, contig_length, read_annotations
from .utils.file_utils import write_table
from .utils.logging_utils import (
    setup_logging, get_logger, banner,
    log_run_summary, log_captured_warnings
)
from .windows import build_windows, windowize_all


logger = get_logger(__name__)


TABLE_OPTIONS = [
    click.option('--window-size', required=True, type=int, help='Window size in bp'),
    click.option('--out', required=True, help='Output directory'),
    click.option('--prefix', default='windowize', help='Prefix of the output table'),
]

AGGREGATION_OPTIONS = TABLE_OPTIONS + [
    click.option('--max-bp', default=None, type=int,
                 help='Length of the coordinate space; inferred from the inputs when omitted'),
    click.option('--on-out-of-range', default='raise', type=click.Choice(OUT_OF_RANGE_POLICIES),
                 help='Raise an error, or drop input lying past the last window'),
]


def _apply(options, func):
    for option in reversed(options):
        func = option(func)
    return func


def table_options(func):
    """Options of every command that writes a window table."""
    return _apply(TABLE_OPTIONS, func)


def shared_options(func):
    """Options common to the aggregation commands."""
    return _apply(AGGREGATION_OPTIONS, func)


def advance_option(func):
    return click.option('--variant-advance', default='seek', type=click.Choice(ADVANCE_POLICIES),
                        help="'seek' bins each position into its window; 'step' advances "
                             "one window per position past the current one without counting it")(func)


def resolve_max_bp(max_bp, chrom=None, sequence=None, vcf=None):
    """Explicit --max-bp, else the contig length from FASTA or the VCF header, else None."""
    if max_bp is not None:
        return max_bp
    if sequence is not None and len(sequence) > 0:
        return len(sequence)
    if vcf is not None:
        length = contig_length(vcf, chrom)
        if length:
            logger.info(f"Using contig length {length:,} from the VCF header as max_bp")
            return length
    return None


def run_windowize(command: str, out: str, prefix: str, window_size: int, max_bp, on_out_of_range: str,
                  variant_advance: str = 'seek', chrom: str = None, fasta: str = None, vcf: str = None,
                  annotation: str = None, feature: str = None):
    """Read the given inputs for one contig, aggregate them and write the combined table."""
    setup_logging(Path(out) / f"{command}.log")
    try:
        start_time = time.time()
        logger.info(f"Start time: {datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        config = Config(window_size=window_size, max_bp=max_bp, output_dir=out,
                        on_out_of_range=on_out_of_range, variant_advance=variant_advance)

        banner("Step 1 Reading inputs")
        sequence = read_sequence(fasta, chrom) if fasta else None
        positions = read_variant_positions(vcf, chrom) if vcf else None
        annotations = read_annotations(annotation, chrom, feature) if annotation else None

        banner("Step 2 Windowizing")
        resolved = resolve_max_bp(config.max_bp, chrom, sequence, vcf)
        result = windowize_all(config, sequence=sequence, positions=positions,
                               annotations=annotations, max_bp=resolved)

        output = write_table(result, Path(out) / f"{prefix}_{command}.csv")
        logger.info(f"Results saved in {output}")

        stats = {"Windows": f"{len(result):,}", "Window size": f"{config.window_size:,} bp"}
        if sequence is not None:
            stats["Sequence length"] = f"{len(sequence):,} bp"
        if positions is not None:
            stats["Variants binned"] = f"{int(result['variants'].sum()):,} of {len(positions):,}"
        if annotations is not None:
            stats["Genic bp"] = f"{int(result['genic'].sum()):,}"

        banner("Summary")
        log_run_summary(start_time, stats)
        log_captured_warnings()
        return output
    except WindowizeError as e:
        logger.error(f"Error in {command}: {str(e)}")
        raise click.Abort()


@click.group()
def cli():
    """Fixed-size genomic windows with per-window composition, variant and annotation counts."""
    pass


@cli.command("windows")
@click.option('--max-bp', required=True, type=int, help='Length of the coordinate space')
@table_options
def windows(max_bp: int, window_size: int, out: str, prefix: str):
    """Write the bare window table for positions 1..max-bp."""
    setup_logging(Path(out) / "windows.log")
    try:
        table = build_windows(window_size, max_bp)
        output = write_table(table, Path(out) / f"{prefix}_windows.csv")
        logger.info(f"{len(table):,} windows saved in {output}")
    except WindowizeError as e:
        logger.error(f"Error in windows: {str(e)}")
        raise click.Abort()


@cli.command("sequence")
@click.option('--fasta', required=True, help='Reference FASTA file')
@click.option('--chrom', required=True, help='Contig to windowize')
@shared_options
def sequence(fasta: str, chrom: str, **kwargs):
    """Count A, C, G, T, N and other symbols per window."""
    run_windowize("sequence", chrom=chrom, fasta=fasta, **kwargs)


@cli.command("variants")
@click.option('--vcf', required=True, help='Input VCF file')
@click.option('--chrom', required=True, help='Contig to windowize')
@shared_options
@advance_option
def variants(vcf: str, chrom: str, **kwargs):
    """Count variant positions per window."""
    run_windowize("variants", chrom=chrom, vcf=vcf, **kwargs)


@cli.command("annotations")
@click.option('--annotation', required=True, help='BED, GFF or GTF file of annotated intervals')
@click.option('--chrom', required=True, help='Contig to windowize')
@click.option('--feature', default=None, help='Keep only GFF/GTF rows of this feature type, e.g. gene')
@shared_options
def annotations(annotation: str, chrom: str, feature, **kwargs):
    """Count annotated (genic) positions per window."""
    run_windowize("annotations", chrom=chrom, annotation=annotation, feature=feature, **kwargs)


@cli.command("run-all")
@click.option('--chrom', required=True, help='Contig to windowize')
@click.option('--fasta', default=None, help='Reference FASTA file')
@click.option('--vcf', default=None, help='Input VCF file')
@click.option('--annotation', default=None, help='BED, GFF or GTF file of annotated intervals')
@click.option('--feature', default=None, help='Keep only GFF/GTF rows of this feature type, e.g. gene')
@shared_options
@advance_option
def run_all(chrom: str, fasta, vcf, annotation, feature, **kwargs):
    """Run every pass whose input is given and write one combined table."""
    if not (fasta or vcf or annotation):
        raise click.UsageError("Give at least one of --fasta, --vcf or --annotation")
    run_windowize("run-all", chrom=chrom, fasta=fasta, vcf=vcf, annotation=annotation,
                  feature=feature, **kwargs)


if __name__ == '__main__':
    cli()
