"""List crawler for the MCST regional festival listing."""
import logging
import re
import time
from typing import List

from processor.models import ListEntry
from scraper.html_document import HtmlDocument
from scraper.mcst_client import FetchError, McstClient
from settings import ScraperSettings

logger = logging.getLogger(__name__)

# e.g. "[1/12쪽]"
PAGE_COUNTER_PATTERN = re.compile(r'\[(\d+)\s*/\s*(\d+)\s*쪽\]')
LEADING_NUMBER = re.compile(r'\d+', re.ASCII)
PERIOD_PREFIX = re.compile(r'^기간\s*:\s*')
PLACE_PREFIX = re.compile(r'^장소\s*:\s*')


class FestivalListCrawler:
    """Crawls listing pages sequentially into ListEntry references."""

    def __init__(self, client: McstClient, settings: ScraperSettings):
        self.client = client
        self.settings = settings
        self.pages_crawled = 0

    def crawl(self) -> List[ListEntry]:
        """
        Fetch every listing page and collect its entries.

        Page 1 is fetched once and used both for page-count discovery and
        for its own entries. A failure on any later page stops pagination
        and keeps what has been collected so far.

        Returns:
            List of ListEntry objects in discovery order

        Raises:
            FetchError: If page 1 cannot be fetched
        """
        first_url = self.settings.list_url(1)
        logger.info(f"Fetching festival listing: {first_url}")
        first_html = self.client.fetch_html(first_url)

        total_pages = parse_total_pages(first_html)
        logger.info(f"Listing has {total_pages} pages")

        entries = parse_page(first_html)
        self.pages_crawled = 1
        logger.info(f"Page 1: collected {len(entries)} festivals")

        for page_no in range(2, total_pages + 1):
            time.sleep(self.settings.page_delay_seconds)
            try:
                html = self.client.fetch_html(self.settings.list_url(page_no))
            except FetchError as e:
                logger.warning(f"Stopping pagination at page {page_no}: {e}")
                break

            page_entries = parse_page(html)
            self.pages_crawled += 1
            logger.info(f"Page {page_no}: collected {len(page_entries)} festivals")
            entries.extend(page_entries)

        return entries


def parse_total_pages(html: str) -> int:
    """
    Read the total page count from a listing page.

    The "[current/total쪽]" counter wins; otherwise the highest numbered
    pagination link is used; otherwise 1.
    """
    document = HtmlDocument.parse(html)

    counter = PAGE_COUNTER_PATTERN.search(document.first_text('.whole-count'))
    if counter:
        return int(counter.group(2))

    numbers = []
    for text in document.texts('a.page-link'):
        leading = LEADING_NUMBER.match(text)
        if leading:
            numbers.append(int(leading.group()))
    return max(numbers) if numbers else 1


def parse_page(html: str) -> List[ListEntry]:
    """
    Parse festival entries from one listing page.

    Items without a detail link are skipped; missing period or place
    lines become empty strings.
    """
    document = HtmlDocument.parse(html)
    entries = []

    for item in document.select('ul.thum-list > li'):
        href = item.first_attr('a.go', 'href')
        if not href:
            continue

        lines = item.texts('.text.festival .list li')
        period_line = next((line for line in lines if '기간' in line), '')
        place_line = next((line for line in lines if '장소' in line), '')

        entries.append(ListEntry(
            name=item.first_text('.text.festival .sub-tit'),
            period_text=PERIOD_PREFIX.sub('', period_line).strip(),
            place_text=PLACE_PREFIX.sub('', place_line).strip(),
            detail_ref=href
        ))

    return entries
