"""Detail page extractor for MCST festivals."""
import logging

from processor.models import DetailFields
from processor.normalizer import normalize_homepage_url, normalize_image_url
from scraper.html_document import HtmlDocument
from scraper.mcst_client import McstClient
from settings import ScraperSettings

logger = logging.getLogger(__name__)

IMAGE_SELECTORS = ('.culture_view.festival img', '.culture_view img')
HOMEPAGE_LABELS = ('관련 누리집', '홈페이지')


def extract_detail(document: HtmlDocument, detail_url: str, base_url: str) -> DetailFields:
    """
    Extract festival fields from a detail page.

    Every field is optional; missing markup yields empty strings.

    Args:
        document: Parsed detail page
        detail_url: URL the page was fetched from
        base_url: Site origin used to absolutize image paths

    Returns:
        DetailFields for the page
    """
    image_src = ''
    for selector in IMAGE_SELECTORS:
        image_src = document.first_attr(selector, 'src')
        if image_src:
            break

    homepage_href = ''
    for label in HOMEPAGE_LABELS:
        homepage_href = document.link_for_label(label)
        if homepage_href:
            break

    return DetailFields(
        name=document.first_text('h3.view_title'),
        region=document.text_for_label('개최지역'),
        period=document.text_for_label('개최기간'),
        venue=document.text_for_label('축제장소'),
        fee_text=document.text_for_label('요금'),
        description=document.first_text('.view_con'),
        image_url=normalize_image_url(image_src, base_url),
        homepage_url=normalize_homepage_url(homepage_href),
        source_url=detail_url
    )


class FestivalDetailScraper:
    """Fetches and extracts one festival detail page at a time."""

    def __init__(self, client: McstClient, settings: ScraperSettings):
        self.client = client
        self.settings = settings

    def fetch_detail(self, detail_url: str) -> DetailFields:
        """
        Fetch a detail page and extract its fields.

        Raises:
            FetchError: If the page cannot be fetched
        """
        html = self.client.fetch_html(detail_url)
        fields = extract_detail(HtmlDocument.parse(html), detail_url, self.settings.base_url)
        logger.debug(f"Extracted '{fields.name}' period='{fields.period}' from {detail_url}")
        return fields
