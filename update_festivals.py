#!/usr/bin/env python3
"""Command-line entry point for the festival dataset refresh."""
import json
import logging
import sys
from datetime import datetime

from processor.festival_pipeline import FestivalPipeline
from scraper.festival_detail import FestivalDetailScraper
from scraper.festival_list import FestivalListCrawler
from scraper.mcst_client import McstClient
from settings import ScraperSettings, StatusSettings
from storage.festivals_writer import FestivalsWriter

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_ATTRS = set(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {'message', 'asctime'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON, including any `extra` fields."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter on stdout.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def build_pipeline(settings: ScraperSettings) -> FestivalPipeline:
    """Wire the scraper, detail extractor and writer into a pipeline."""
    client = McstClient(settings)
    return FestivalPipeline(
        settings=settings,
        list_crawler=FestivalListCrawler(client, settings),
        detail_scraper=FestivalDetailScraper(client, settings),
        writer=FestivalsWriter(settings.output_path, source_url=settings.list_url(1))
    )


def main() -> int:
    """
    Run the full festival refresh.

    Returns:
        Process exit status: 0 on success (including skipped items),
        1 when the run aborts
    """
    settings = ScraperSettings.from_env()
    status = StatusSettings.from_env()

    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    logger.info(
        "Festival update started",
        extra={
            'started_at': datetime.now().isoformat(timespec='seconds'),
            'list_url': settings.list_url(1),
            'output_path': str(settings.output_path)
        }
    )

    try:
        pipeline = build_pipeline(settings)
        summary = pipeline.run()
    except Exception as e:
        logger.error(
            f"Festival update failed: {e}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        return 1

    logger.info(
        "Festival update completed successfully",
        extra={
            'pages_crawled': summary.pages_crawled,
            'entries_listed': summary.entries_listed,
            'unique_entries': summary.unique_entries,
            'resolved': summary.resolved,
            'failed': summary.failed,
            'expired': summary.expired,
            'written': summary.written,
            'output_path': str(summary.output_path),
            'duration_seconds': summary.duration_seconds,
            'status_page': status.actions_url
        }
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
