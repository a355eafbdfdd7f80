"""
Logging and error tracking utilities for the submission exporter.
"""
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class FetchError:
    """A failed remote fetch (submission list, sync or signature image)."""
    source: str
    url: str
    error_type: str
    error_message: str
    timestamp: datetime = field(default_factory=datetime.now)
    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source": self.source,
            "url": self.url,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "timestamp": self.timestamp.isoformat(),
            "severity": self.severity.value
        }


@dataclass
class ExportStats:
    """Statistics about export operations."""
    submissions_loaded: int = 0
    submissions_exported: int = 0
    csv_exports: int = 0
    pdf_exports: int = 0
    signatures_embedded: int = 0
    missing_signatures: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "submissions_loaded": self.submissions_loaded,
            "submissions_exported": self.submissions_exported,
            "csv_exports": self.csv_exports,
            "pdf_exports": self.pdf_exports,
            "signatures_embedded": self.signatures_embedded,
            "missing_signatures": self.missing_signatures,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "end_time": self.end_time.isoformat() if self.end_time else None
        }


class ExportLogger:
    """Tracks fetch errors and export statistics for one session."""

    def __init__(self, log_dir: Optional[str] = None):
        """Initialize the export logger.

        Args:
            log_dir: Directory for error reports; reports are not written when None
        """
        self.log_dir = Path(log_dir) if log_dir else None
        self.errors: List[FetchError] = []
        self.stats = ExportStats(start_time=datetime.now())
        self.logger = logging.getLogger("submission_exporter")

    def log_fetch_error(self, source: str, url: str, error: Exception) -> None:
        """Record a failed fetch.

        Args:
            source: What was being fetched ("signature", "submissions", "sync")
            url: URL that failed
            error: The exception raised
        """
        fetch_error = FetchError(
            source=source,
            url=url,
            error_type=type(error).__name__,
            error_message=str(error),
            severity=self._determine_error_severity(source)
        )
        self.errors.append(fetch_error)

        self.logger.warning(f"Fetch error - {source}: {type(error).__name__} for {url}: {error}")

    def record_signature(self, embedded: bool) -> None:
        if embedded:
            self.stats.signatures_embedded += 1
        else:
            self.stats.missing_signatures += 1

    def get_summary(self) -> Dict[str, Any]:
        """Count errors by source and severity."""
        by_source: Dict[str, int] = {}
        by_severity: Dict[str, int] = {}
        for error in self.errors:
            by_source[error.source] = by_source.get(error.source, 0) + 1
            by_severity[error.severity.value] = by_severity.get(error.severity.value, 0) + 1

        return {
            "total_errors": len(self.errors),
            "errors_by_source": by_source,
            "errors_by_severity": by_severity
        }

    def write_error_report(self) -> Optional[Path]:
        """Write errors and stats as JSON.

        Returns:
            Path of the report, or None when no log directory is configured
        """
        if self.log_dir is None:
            return None

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.stats.end_time = datetime.now()

        report_file = self.log_dir / f"error_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
        with open(report_file, 'w', encoding='utf-8') as f:
            json.dump({
                "errors": [error.to_dict() for error in self.errors],
                "stats": self.stats.to_dict(),
                "summary": self.get_summary()
            }, f, indent=2)

        self.logger.info(f"Error report generated: {report_file}")
        return report_file

    def _determine_error_severity(self, source: str) -> ErrorSeverity:
        # A missing signature degrades one field; a failed list or sync affects what the user sees
        if source == "signature":
            return ErrorSeverity.LOW
        if source in ("submissions", "sync"):
            return ErrorSeverity.HIGH
        return ErrorSeverity.MEDIUM
