"""Logging utilities for Penroute."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Marks handlers installed by configure_logging so repeated calls replace them
_HANDLER_TAG = "_penroute_handler"


@dataclass
class ProcessingStats:
    """Statistics from a cell processing run."""

    sites_sampled: int = 0
    cells_total: int = 0
    cells_kept: int = 0
    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    points_sampled: int = 0
    routes_built: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)
    cell_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_cell_time_ms(self) -> float | None:
        if not self.cell_timings_ms:
            return None
        return sum(self.cell_timings_ms) / len(self.cell_timings_ms)

    @property
    def min_cell_time_ms(self) -> float | None:
        return min(self.cell_timings_ms) if self.cell_timings_ms else None

    @property
    def max_cell_time_ms(self) -> float | None:
        return max(self.cell_timings_ms) if self.cell_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_TAG, True)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(console_handler, _HANDLER_TAG, True)
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("penroute")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking cell processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_partition(self, sites: int, cells: int, kept: int) -> None:
        """Log the Voronoi partition result."""
        self._logger.info("Partition computed", sites=sites, cells=cells, kept=kept)
        self._stats.sites_sampled = sites
        self._stats.cells_total = cells
        self._stats.cells_kept = kept

    def log_cell_start(self, cell_index: int) -> None:
        """Log start of cell processing."""
        self._logger.debug("Processing cell", cell=cell_index)

    def log_cell_complete(
        self,
        cell_index: int,
        points: int,
        duration_ms: float,
    ) -> None:
        """Log successful cell processing."""
        self._logger.debug(
            "Cell processed",
            cell=cell_index,
            points=points,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.points_sampled += points
        self._stats.cell_timings_ms.append(duration_ms)
        if points > 1:
            self._stats.routes_built += 1

    def log_cell_skipped(self, cell_index: int, reason: str) -> None:
        """Log a cell that produced no route."""
        self._logger.debug("Cell skipped", cell=cell_index, reason=reason)
        self._stats.skipped_count += 1

    def log_cell_error(
        self,
        cell_index: int,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log cell processing error."""
        self._logger.error(
            "Cell processing failed",
            cell=cell_index,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((cell_index, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
