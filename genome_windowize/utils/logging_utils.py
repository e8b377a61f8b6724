import sys
import time
import logging
import datetime
from pathlib import Path


class WarningCollector(logging.Handler):
    """Keeps the formatted WARNING and ERROR messages of a run for the closing summary."""

    def __init__(self):
        super().__init__(level=logging.WARNING)
        self.messages = []

    def emit(self, record):
        self.messages.append(self.format(record))


_collector = WarningCollector()


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance"""
    return logging.getLogger(name)


def setup_logging(log_file: Path, level: int = logging.INFO):
    """
    Route the root logger to the console and to files beside ``log_file``.

    ``<stem>.log`` gets everything at ``level`` and above, ``<stem>_warnings.log``
    gets warnings only, and the warnings are also kept in memory for
    ``log_captured_warnings``. Handlers from a previous run are replaced.
    """
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    _collector.messages.clear()

    warnings_file = log_file.with_name(f"{log_file.stem}_warnings.log")
    handlers = [
        (logging.StreamHandler(sys.stdout), level),
        (logging.FileHandler(log_file), level),
        (logging.FileHandler(warnings_file), logging.WARNING),
        (_collector, logging.WARNING),
    ]
    formatter = logging.Formatter('%(message)s')
    for handler, handler_level in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)


def log_captured_warnings():
    """Repeat every warning of the run at the end of the log."""
    if not _collector.messages:
        return
    logger = logging.getLogger()
    logger.info("")
    logger.info(f"{len(_collector.messages)} warning(s) during this run:")
    for msg in _collector.messages:
        logger.info(f"  - {msg}")


def log_tqdm_summary(pbar, logger):
    stats = pbar.format_dict
    minutes, seconds = divmod(int(stats["elapsed"]), 60)
    logger.info(f"{pbar.desc or 'Task'}: {stats['n']:,} {stats['unit']} in {minutes}m {seconds}s")


def banner(title: str, width: int = 100):
    text = f" {title} "
    logging.getLogger().info(text.center(width, "═"))


def get_clean_command() -> str:
    """Command line of the current run with each option on its own line."""
    program = Path(sys.argv[0]).name
    args = sys.argv[1:]
    if not args:
        return f"\n  {program}"

    lines = [f"\n  {program} {args[0]}"]
    rest = args[1:]
    for i, arg in enumerate(rest):
        if not arg.startswith("-"):
            continue
        value = rest[i + 1] if i + 1 < len(rest) and not rest[i + 1].startswith("-") else ""
        lines.append(f"    {arg:<20}{value}")
    return "\n".join(lines)


def log_run_summary(start: float, stats: dict):
    """Log the command, wall-clock span and ``stats`` of a run started at ``start``."""
    hours, rest = divmod(int(time.time() - start), 3600)
    minutes, seconds = divmod(rest, 60)
    rows = {
        "Command": get_clean_command(),
        "Started": datetime.datetime.fromtimestamp(start).strftime('%Y-%m-%d %H:%M:%S'),
        "Runtime": f"{hours}:{minutes:02d}:{seconds:02d}",
        **stats,
    }
    logger = get_logger(__name__)
    for key, value in rows.items():
        logger.info(f"{key + ':':<24}{value}")
