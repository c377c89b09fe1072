"""Data models for festival scraping and normalization."""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ListEntry:
    """Lightweight festival reference scraped from a listing page."""
    name: str
    period_text: str
    place_text: str
    detail_ref: str

    @property
    def identity(self) -> tuple[str, str]:
        return (self.name, self.detail_ref)


@dataclass
class DetailFields:
    """Raw fields extracted from one festival detail page."""
    name: str = ''
    region: str = ''
    period: str = ''
    venue: str = ''
    fee_text: str = ''
    description: str = ''
    image_url: str = ''
    homepage_url: str = ''
    source_url: str = ''


@dataclass(frozen=True)
class DateRange:
    """Parsed festival period."""
    start_date: str
    end_date: str
    raw: str


@dataclass
class FestivalRecord:
    """Validated and normalized festival."""
    name: str
    location: str
    address: str
    start_date: str
    end_date: str
    period_text: str
    description: str
    source_url: str
    homepage_url: str
    image_url: str
    fee_text: str


class FailureReason(Enum):
    """Why a single festival was dropped from the run."""
    FETCH_FAILED = 'fetch_failed'
    PARSE_FAILED = 'parse_failed'
    MISSING_DATES = 'missing_dates'


@dataclass
class DetailResult:
    """Outcome of resolving one listing entry: a record or a failure."""
    record: Optional[FestivalRecord] = None
    failure: Optional[FailureReason] = None
    message: str = ''

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass
class RunSummary:
    """Counters for one pipeline run."""
    pages_crawled: int = 0
    entries_listed: int = 0
    unique_entries: int = 0
    resolved: int = 0
    failed: int = 0
    expired: int = 0
    written: int = 0
    output_path: Optional[Path] = None
    duration_seconds: float = 0.0
