"""Normalization of festival period, region and link text."""
import logging
import re
from datetime import date, timedelta
from typing import Optional

from processor.models import DateRange

logger = logging.getLogger(__name__)

UNSPECIFIED_REGION = '기타'

# e.g. "2026. 1. 9. ~ 1. 25. | 10:00~17:00" or "2025. 12. 19. ~ 2026. 2. 1."
PERIOD_PATTERN = re.compile(
    r'(\d{4})\.\s*(\d{1,2})\.\s*(\d{1,2})\.\s*~\s*(?:(\d{4})\.\s*)?(\d{1,2})\.\s*(\d{1,2})\.'
)

DETAIL_PATH = '/site/s_culture/festival/'


def parse_range(text: Optional[str]) -> Optional[DateRange]:
    """
    Parse a festival period into ISO 8601 start and end dates.

    Trailing time-of-day text is ignored. A missing end year means the
    range ends in the start year. Out-of-range days and months roll over
    into the following month or year. Reversed ranges are returned as-is.

    Args:
        text: Period text (e.g., "2026. 1. 9. ~ 1. 25. | 10:00~17:00")

    Returns:
        DateRange, or None if the text does not contain a parsable range
    """
    if not text:
        return None

    match = PERIOD_PATTERN.search(text)
    if not match:
        return None

    start_year, start_month, start_day, end_year, end_month, end_day = match.groups()
    end_year = end_year or start_year

    try:
        start = _rolled_date(int(start_year), int(start_month), int(start_day))
        end = _rolled_date(int(end_year), int(end_month), int(end_day))
    except (ValueError, OverflowError) as e:
        logger.debug(f"Period text is outside the supported calendar '{text}': {e}")
        return None

    return DateRange(
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        raw=text.strip()
    )


def _rolled_date(year: int, month: int, day: int) -> date:
    """
    Build a date, carrying out-of-range months and days into the next unit.

    "2026. 2. 30." becomes 2026-03-02 and month 13 becomes January of the
    following year; day 0 is the last day of the previous month.
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def extract_region_token(text: Optional[str]) -> str:
    """
    Return the first whitespace-delimited token of a region or address.

    "경상북도 영양군" -> "경상북도". Empty input yields UNSPECIFIED_REGION.
    """
    tokens = (text or '').split()
    if not tokens:
        return UNSPECIFIED_REGION
    return tokens[0]


def normalize_homepage_url(href: Optional[str]) -> str:
    """Prefix bare-domain or protocol-relative links with https://."""
    href = (href or '').strip()
    if not href:
        return ''
    if href.startswith('http'):
        return href
    return 'https://' + href.lstrip('/')


def normalize_image_url(src: Optional[str], base_url: str) -> str:
    """Prefix site-relative image paths with the site origin."""
    src = (src or '').strip()
    if not src:
        return ''
    if src.startswith('http'):
        return src
    return f"{base_url}{src}"


def resolve_detail_url(href: str, base_url: str) -> str:
    """Resolve a listing href to an absolute detail page URL."""
    if href.startswith('http'):
        return href
    return f"{base_url}{DETAIL_PATH}{href.lstrip('/')}"
