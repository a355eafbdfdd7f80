"""
Core data models for the submission exporter.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple


FieldValue = Optional[str]
FieldItems = Tuple[Tuple[str, FieldValue], ...]


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an API timestamp into a local, naive datetime.

    Args:
        value: ISO-8601 string (a trailing 'Z' is accepted) or datetime

    Returns:
        Naive datetime in local time

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        if not value:
            raise ValueError("Timestamp cannot be empty")
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _coerce_value(value: Any) -> FieldValue:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value if v is not None)
    return str(value)


@dataclass(frozen=True)
class Submission:
    """
    One submitted instance of a form.

    ``submission_data`` is kept as an ordered tuple of ``(label, value)`` pairs
    so the plugin's field order is an explicit part of the record.
    """
    id: str
    form_id: str
    client_id: str
    submitted_at: datetime
    submission_data: FieldItems = ()
    wordpress_url: Optional[str] = None

    def __post_init__(self):
        """Validate required fields after initialization."""
        if not self.id:
            raise ValueError("Submission ID cannot be empty")

        if not isinstance(self.submitted_at, datetime):
            raise ValueError("submitted_at must be a datetime")

        labels = [label for label, _ in self.submission_data]
        if len(labels) != len(set(labels)):
            raise ValueError(f"Duplicate field labels in submission {self.id}")

    @classmethod
    def from_api(cls, record: Dict[str, Any]) -> 'Submission':
        """Create a Submission from a dashboard API record."""
        data = record.get("submission_data") or {}
        if not isinstance(data, dict):
            data = {}

        return cls(
            id=str(record.get("id", "")),
            form_id=str(record.get("form_id") or ""),
            client_id=str(record.get("client_id") or ""),
            submitted_at=parse_timestamp(record.get("submitted_at")),
            submission_data=tuple((str(k), _coerce_value(v)) for k, v in data.items()),
            wordpress_url=record.get("wordpress_url") or None,
        )

    def keys(self) -> List[str]:
        """Field labels in stored order."""
        return [label for label, _ in self.submission_data]

    def items(self) -> Iterator[Tuple[str, FieldValue]]:
        return iter(self.submission_data)

    def has(self, label: str) -> bool:
        return any(key == label for key, _ in self.submission_data)

    def get(self, label: str, default: FieldValue = None) -> FieldValue:
        for key, value in self.submission_data:
            if key == label:
                return value
        return default


@dataclass(frozen=True)
class Form:
    """A form discovered on a client's site."""
    id: str
    name: str
    plugin: str = ""

    @classmethod
    def from_api(cls, record: Dict[str, Any]) -> 'Form':
        return cls(
            id=str(record.get("id", "")),
            name=record.get("form_name") or record.get("name") or "",
            plugin=record.get("plugin") or "",
        )


@dataclass(frozen=True)
class Client:
    """An end-customer whose WordPress site is synchronized."""
    id: str
    name: str
    wordpress_url: Optional[str] = None

    @classmethod
    def from_api(cls, record: Dict[str, Any]) -> 'Client':
        return cls(
            id=str(record.get("id", "")),
            name=record.get("name") or "",
            wordpress_url=record.get("wordpress_url") or None,
        )

    @property
    def signature_base_url(self) -> Optional[str]:
        """WordPress base URL without a trailing slash."""
        if not self.wordpress_url:
            return None
        return self.wordpress_url.rstrip("/")


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one sync invocation: counts on success, a message on failure."""
    synced: int = 0
    skipped: int = 0
    error: Optional[str] = None

    def __post_init__(self):
        if self.synced < 0 or self.skipped < 0:
            raise ValueError("Sync counts cannot be negative")

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class NameParts:
    """First/last parts of a compound name."""
    first: str = ""
    last: str = ""


@dataclass(frozen=True)
class SubmissionSchema:
    """Columns inferred across a submission sequence."""
    has_compound_name: bool = False
    data_keys: Tuple[str, ...] = ()
    columns: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def csv_headers(self) -> List[str]:
        """Columns without the trailing row-action column."""
        return list(self.columns[:-1]) if self.columns else []
