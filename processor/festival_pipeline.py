"""Pipeline that turns the MCST listing into the generated festivals dataset."""
import logging
import time
from datetime import date
from typing import List, Optional

from processor.models import (
    DetailFields,
    DetailResult,
    FailureReason,
    FestivalRecord,
    ListEntry,
    RunSummary,
)
from processor.normalizer import extract_region_token, parse_range, resolve_detail_url
from scraper.festival_detail import FestivalDetailScraper
from scraper.festival_list import FestivalListCrawler
from scraper.mcst_client import FetchError
from settings import ScraperSettings
from storage.festivals_writer import FestivalsWriter

logger = logging.getLogger(__name__)


class FestivalPipeline:
    """
    Sequential crawl -> deduplicate -> resolve -> filter -> sort -> write.

    Everything runs on one thread, one request at a time. Only a failure
    to fetch the first listing page escapes run(); all other failures
    drop the affected page range or item and the run continues.
    """

    def __init__(
        self,
        settings: ScraperSettings,
        list_crawler: FestivalListCrawler,
        detail_scraper: FestivalDetailScraper,
        writer: FestivalsWriter
    ):
        self.settings = settings
        self.list_crawler = list_crawler
        self.detail_scraper = detail_scraper
        self.writer = writer

    def run(self, today: Optional[date] = None) -> RunSummary:
        """
        Execute the full pipeline and write the dataset.

        Args:
            today: Run date for the recency filter (default: local today)

        Returns:
            RunSummary with per-stage counts

        Raises:
            FetchError: If the first listing page cannot be fetched
        """
        start_time = time.time()
        today = today or date.today()
        summary = RunSummary()

        entries = self.list_crawler.crawl()
        summary.pages_crawled = self.list_crawler.pages_crawled
        summary.entries_listed = len(entries)

        unique_entries = self.deduplicate(entries)
        summary.unique_entries = len(unique_entries)
        logger.info(
            f"Resolving {len(unique_entries)} unique festivals "
            f"({len(entries)} listed)"
        )

        records = []
        for result in self.resolve_details(unique_entries):
            if result.ok:
                records.append(result.record)
            else:
                summary.failed += 1
        summary.resolved = len(records)

        recent = self.filter_recent(records, today)
        summary.expired = len(records) - len(recent)

        ordered = self.sort_records(recent)
        logger.info(f"Collected {len(ordered)} ongoing or upcoming festivals")

        summary.output_path = self.writer.write(ordered)
        summary.written = len(ordered)
        summary.duration_seconds = round(time.time() - start_time, 2)
        return summary

    def deduplicate(self, entries: List[ListEntry]) -> List[ListEntry]:
        """Collapse entries sharing (name, detail_ref); the first occurrence wins."""
        seen = set()
        unique = []
        for entry in entries:
            if entry.identity in seen:
                continue
            seen.add(entry.identity)
            unique.append(entry)
        return unique

    def resolve_details(self, entries: List[ListEntry]) -> List[DetailResult]:
        """
        Fetch and normalize each entry's detail page, one at a time.

        Waits detail_delay_seconds after every attempt, whatever the outcome.
        Failed items are logged and returned as failure results.
        """
        results = []
        for entry in entries:
            detail_url = resolve_detail_url(entry.detail_ref, self.settings.base_url)
            result = self._resolve_one(detail_url)

            if not result.ok:
                logger.warning(
                    f"Skipping festival '{entry.name}' ({detail_url}): "
                    f"{result.failure.value}: {result.message}"
                )

            results.append(result)
            time.sleep(self.settings.detail_delay_seconds)

        return results

    def _resolve_one(self, detail_url: str) -> DetailResult:
        try:
            fields = self.detail_scraper.fetch_detail(detail_url)
        except FetchError as e:
            return DetailResult(failure=FailureReason.FETCH_FAILED, message=str(e))
        except Exception as e:
            return DetailResult(
                failure=FailureReason.PARSE_FAILED,
                message=f"{type(e).__name__}: {e}"
            )
        return self.build_record(fields)

    def build_record(self, fields: DetailFields) -> DetailResult:
        """
        Normalize extracted fields into a FestivalRecord.

        Returns:
            DetailResult with the record, or MISSING_DATES when the period
            text has no parsable range
        """
        period = parse_range(fields.period)
        if period is None:
            return DetailResult(
                failure=FailureReason.MISSING_DATES,
                message=f"unparsable period '{fields.period}'"
            )

        address = ' '.join(part for part in (fields.region, fields.venue) if part)
        location = extract_region_token(fields.region or address or fields.venue)

        record = FestivalRecord(
            name=fields.name,
            location=location,
            address=address,
            start_date=period.start_date,
            end_date=period.end_date,
            period_text=period.raw or fields.period,
            description=fields.description,
            source_url=fields.source_url,
            homepage_url=fields.homepage_url,
            image_url=fields.image_url,
            fee_text=fields.fee_text
        )
        return DetailResult(record=record)

    def filter_recent(self, records: List[FestivalRecord], today: date) -> List[FestivalRecord]:
        """Drop festivals that ended before today; ending today is kept."""
        today_iso = today.isoformat()
        return [record for record in records if record.end_date >= today_iso]

    def sort_records(self, records: List[FestivalRecord]) -> List[FestivalRecord]:
        """Stable sort by start date, ascending."""
        return sorted(records, key=lambda record: record.start_date)
