"""
Tests for the command-line interface
"""

import logging

import pandas as pd
import pytest
from click.testing import CliRunner

from genome_windowize.cli import cli


@pytest.fixture(autouse=True)
def reset_root_logger():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)


@pytest.fixture
def inputs(tmp_path):
    fasta = tmp_path / "ref.fa"
    fasta.write_text(">chr1\nACGTACGTAC\nacgtNNNNRY\n")
    vcf = tmp_path / "calls.vcf"
    vcf.write_text(
        "##fileformat=VCFv4.2\n"
        "##contig=<ID=chr1,length=20>\n"
        "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
        "chr1\t3\t.\tG\tA\t.\tPASS\t.\n"
        "chr1\t12\t.\tC\tT\t.\tPASS\t.\n"
        "chr1\t19\t.\tA\tG\t.\tPASS\t.\n"
    )
    bed = tmp_path / "genes.bed"
    bed.write_text("chr1\t4\t14\tgeneA\n")
    return {"fasta": str(fasta), "vcf": str(vcf), "bed": str(bed)}


class TestCli:
    """Tests for the genome-windowize commands."""

    def test_windows(self, tmp_path):
        """Test writing the bare window table."""
        out = tmp_path / "out"
        result = CliRunner().invoke(cli, ["windows", "--window-size", "5", "--max-bp", "10", "--out", str(out)])
        assert result.exit_code == 0, result.output
        table = pd.read_csv(out / "windowize_windows.csv")
        assert list(table.columns) == ["index", "start", "end", "length"]
        assert table["end"].tolist() == [5, 10, 15]

    def test_windows_invalid_size(self, tmp_path):
        """Test that a bad window size aborts."""
        result = CliRunner().invoke(cli, ["windows", "--window-size", "0", "--max-bp", "10",
                                          "--out", str(tmp_path)])
        assert result.exit_code == 1

    def test_sequence(self, tmp_path, inputs):
        """Test the sequence command with max-bp taken from the contig."""
        out = tmp_path / "out"
        result = CliRunner().invoke(cli, ["sequence", "--fasta", inputs["fasta"], "--chrom", "chr1",
                                          "--window-size", "10", "--out", str(out)])
        assert result.exit_code == 0, result.output
        table = pd.read_csv(out / "windowize_sequence.csv")
        assert len(table) == 3
        assert table["A"].tolist() == [3, 1, 0]
        assert table["N"].tolist() == [0, 4, 0]
        assert table["other"].tolist() == [0, 2, 0]

    def test_variants(self, tmp_path, inputs):
        """Test the variants command with max-bp from the VCF header."""
        out = tmp_path / "out"
        result = CliRunner().invoke(cli, ["variants", "--vcf", inputs["vcf"], "--chrom", "1",
                                          "--window-size", "10", "--out", str(out), "--prefix", "run1"])
        assert result.exit_code == 0, result.output
        table = pd.read_csv(out / "run1_variants.csv")
        assert table["variants"].tolist() == [1, 2, 0]

    def test_run_all(self, tmp_path, inputs):
        """Test a combined run over every input."""
        out = tmp_path / "out"
        result = CliRunner().invoke(cli, ["run-all", "--chrom", "chr1", "--fasta", inputs["fasta"],
                                          "--vcf", inputs["vcf"], "--annotation", inputs["bed"],
                                          "--window-size", "10", "--out", str(out)])
        assert result.exit_code == 0, result.output
        table = pd.read_csv(out / "windowize_run-all.csv")
        assert table["genic"].tolist() == [6, 4, 0]
        assert table["variants"].tolist() == [1, 2, 0]
        assert (out / "run-all.log").exists()

    def test_run_all_requires_input(self, tmp_path):
        """Test that run-all without inputs is a usage error."""
        result = CliRunner().invoke(cli, ["run-all", "--chrom", "chr1", "--window-size", "10",
                                          "--out", str(tmp_path)])
        assert result.exit_code == 2

    def test_out_of_range_aborts(self, tmp_path, inputs):
        """Test that an out-of-range variant aborts unless dropped."""
        args = ["variants", "--vcf", inputs["vcf"], "--chrom", "chr1", "--window-size", "5",
                "--max-bp", "5", "--out", str(tmp_path / "out")]
        assert CliRunner().invoke(cli, args).exit_code == 1
        result = CliRunner().invoke(cli, args + ["--on-out-of-range", "drop"])
        assert result.exit_code == 0, result.output
        table = pd.read_csv(tmp_path / "out" / "windowize_variants.csv")
        assert table["variants"].tolist() == [1, 0]


class TestCliOptions:
    """Tests for per-command option lists and empty inputs."""

    def test_windows_rejects_out_of_range_option(self, tmp_path):
        """Test that the windows command has no out-of-range option."""
        result = CliRunner().invoke(cli, ["windows", "--window-size", "5", "--max-bp", "10",
                                          "--on-out-of-range", "drop", "--out", str(tmp_path)])
        assert result.exit_code == 2

    def test_windows_requires_max_bp(self, tmp_path):
        """Test that max-bp is a required option of the windows command."""
        result = CliRunner().invoke(cli, ["windows", "--window-size", "5", "--out", str(tmp_path)])
        assert result.exit_code == 2

    def test_variants_on_declared_empty_contig(self, tmp_path):
        """Test an all-zero column for a contig declared without records."""
        vcf = tmp_path / "two_contigs.vcf"
        vcf.write_text(
            "##fileformat=VCFv4.2\n"
            "##contig=<ID=chr1,length=20>\n"
            "##contig=<ID=chr2,length=25>\n"
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
            "chr1\t3\t.\tG\tA\t.\tPASS\t.\n"
        )
        out = tmp_path / "out"
        result = CliRunner().invoke(cli, ["variants", "--vcf", str(vcf), "--chrom", "chr2",
                                          "--window-size", "10", "--out", str(out)])
        assert result.exit_code == 0, result.output
        table = pd.read_csv(out / "windowize_variants.csv")
        assert table["variants"].tolist() == [0, 0, 0]
