"""Fixed-size genomic windows with per-window sequence, variant and annotation counts."""

from .config import Config
from .exceptions import WindowizeError, InvalidArgument, OutOfRange, InputError
from .windows import (
    build_windows,
    aggregate_sequence,
    aggregate_variants,
    aggregate_annotations,
    windowize_all
)
from . import readers
from . import utils

__version__ = '0.1.0'
