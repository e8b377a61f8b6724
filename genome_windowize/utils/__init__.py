"""Utility functions for file handling and logging."""

from .file_utils import (
    match_contig,
    check_input_file,
    write_table
)
from .logging_utils import (
    setup_logging,
    get_logger
)

__all__ = [
    'match_contig',
    'check_input_file',
    'write_table',
    'setup_logging',
    'get_logger'
]
