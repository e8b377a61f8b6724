import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import InvalidArgument

OUT_OF_RANGE_POLICIES = ("raise", "drop")
ADVANCE_POLICIES = ("seek", "step")


def check_positive_int(name: str, value) -> int:
    """Return ``value`` as an int, or raise InvalidArgument unless it is a positive integer."""
    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")
    try:
        as_int = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")
    if as_int != value or as_int <= 0:
        raise InvalidArgument(f"{name} must be a positive integer, got {value!r}")
    return as_int


def check_policy(name: str, value: str, allowed) -> str:
    if value not in allowed:
        raise InvalidArgument(f"{name} must be one of {', '.join(allowed)}; got {value!r}")
    return value


@dataclass
class Config:
    """Configuration for a windowize run"""
    window_size: int
    max_bp: Optional[int] = None
    output_dir: Optional[str] = None
    on_out_of_range: str = "raise"
    variant_advance: str = "seek"

    def __post_init__(self):
        """Validate sizes and policies and create the output directory"""
        self.window_size = check_positive_int("window_size", self.window_size)
        if self.max_bp is not None:
            self.max_bp = check_positive_int("max_bp", self.max_bp)
        check_policy("on_out_of_range", self.on_out_of_range, OUT_OF_RANGE_POLICIES)
        check_policy("variant_advance", self.variant_advance, ADVANCE_POLICIES)
        if self.output_dir is not None:
            os.makedirs(self.output_dir, exist_ok=True)
