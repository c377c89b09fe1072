"""Unit tests for FestivalListCrawler."""
from unittest.mock import call, patch

import pytest
import responses
from requests.exceptions import ConnectionError

from processor.models import ListEntry
from scraper.festival_list import FestivalListCrawler, parse_page, parse_total_pages
from scraper.mcst_client import FetchError, McstClient


@pytest.fixture
def crawler(settings):
    return FestivalListCrawler(McstClient(settings), settings)


class TestParsePage:
    """Test cases for listing page parsing."""

    def test_parses_entries(self, listing_html):
        html = listing_html([
            ('영양 꽁꽁 겨울축제', '2026. 1. 9. ~ 1. 25.', '경상북도 영양군', 'festivalView.jsp?pSeq=101'),
            ('화천 산천어축제', '2026. 1. 10. ~ 2. 1.', '강원특별자치도 화천군', 'festivalView.jsp?pSeq=102'),
        ])

        entries = parse_page(html)

        assert entries == [
            ListEntry(
                name='영양 꽁꽁 겨울축제',
                period_text='2026. 1. 9. ~ 1. 25.',
                place_text='경상북도 영양군',
                detail_ref='festivalView.jsp?pSeq=101'
            ),
            ListEntry(
                name='화천 산천어축제',
                period_text='2026. 1. 10. ~ 2. 1.',
                place_text='강원특별자치도 화천군',
                detail_ref='festivalView.jsp?pSeq=102'
            ),
        ]

    def test_skips_items_without_detail_link(self, listing_html):
        """Test that items with no link or an empty href are skipped."""
        html = listing_html([
            ('No Link', '2026. 1. 9. ~ 1. 25.', '서울', None),
            ('Empty Link', '2026. 1. 9. ~ 1. 25.', '서울', ''),
            ('Linked', '2026. 1. 9. ~ 1. 25.', '서울', 'festivalView.jsp?pSeq=1'),
        ])

        entries = parse_page(html)

        assert [entry.name for entry in entries] == ['Linked']

    def test_missing_sub_fields_become_empty(self, listing_html):
        html = listing_html([('Sparse', None, None, 'festivalView.jsp?pSeq=9')])

        entries = parse_page(html)

        assert entries[0].period_text == ''
        assert entries[0].place_text == ''

    def test_empty_page(self, listing_html):
        assert parse_page(listing_html([])) == []


class TestParseTotalPages:
    """Test cases for page count discovery."""

    def test_counter_string(self, listing_html):
        html = listing_html([], counter='전체 120건 [1/12쪽]')
        assert parse_total_pages(html) == 12

    def test_counter_wins_over_page_links(self, listing_html):
        html = listing_html([], counter='[1 / 3 쪽]', page_links=[1, 2, 3, 4, 5, 10])
        assert parse_total_pages(html) == 3

    def test_falls_back_to_max_page_link(self, listing_html):
        html = listing_html([], page_links=[1, 2, 7, 3])
        assert parse_total_pages(html) == 7

    def test_page_links_with_non_ascii_digits_or_suffix(self, listing_html):
        """Test that superscript digits are ignored and numeric prefixes are read."""
        html = listing_html([], page_links=['1', '²', '10페이지', '다음'])
        assert parse_total_pages(html) == 10

    def test_defaults_to_one(self, listing_html):
        assert parse_total_pages(listing_html([])) == 1


class TestFestivalListCrawler:
    """Test cases for sequential crawling."""

    @responses.activate
    def test_crawls_all_pages_reusing_first_response(self, crawler, settings, listing_html):
        """Test that page 1 is requested once and every page is collected."""
        responses.add(
            responses.GET,
            settings.list_url(1),
            body=listing_html([('A', 'p', 'l', 'a.jsp')], counter='[1/2쪽]'),
            status=200
        )
        responses.add(
            responses.GET,
            settings.list_url(2),
            body=listing_html([('B', 'p', 'l', 'b.jsp')], counter='[2/2쪽]'),
            status=200
        )

        entries = crawler.crawl()

        assert [entry.name for entry in entries] == ['A', 'B']
        assert len(responses.calls) == 2
        assert crawler.pages_crawled == 2

    @responses.activate
    def test_first_page_failure_is_fatal(self, crawler, settings):
        responses.add(responses.GET, settings.list_url(1), body='Server Error', status=500)

        with pytest.raises(FetchError) as exc_info:
            crawler.crawl()

        assert exc_info.value.status_code == 500

    @responses.activate
    def test_later_page_failure_stops_pagination(self, crawler, settings, listing_html):
        """Test that a failed page ends the crawl and keeps earlier entries."""
        responses.add(
            responses.GET,
            settings.list_url(1),
            body=listing_html([('A', 'p', 'l', 'a.jsp')], counter='[1/4쪽]'),
            status=200
        )
        responses.add(
            responses.GET,
            settings.list_url(2),
            body=listing_html([('B', 'p', 'l', 'b.jsp')]),
            status=200
        )
        responses.add(responses.GET, settings.list_url(3), body='Not Found', status=404)

        entries = crawler.crawl()

        assert [entry.name for entry in entries] == ['A', 'B']
        # Page 4 is never requested, page 3 is not retried
        assert len(responses.calls) == 3
        assert crawler.pages_crawled == 2

    @responses.activate
    def test_later_page_transport_error_stops_pagination(self, crawler, settings, listing_html):
        responses.add(
            responses.GET,
            settings.list_url(1),
            body=listing_html([('A', 'p', 'l', 'a.jsp')], counter='[1/2쪽]'),
            status=200
        )
        responses.add(
            responses.GET,
            settings.list_url(2),
            body=ConnectionError('connection reset')
        )

        entries = crawler.crawl()

        assert [entry.name for entry in entries] == ['A']

    @responses.activate
    @patch('scraper.festival_list.time.sleep')
    def test_waits_between_pages(self, mock_sleep, listing_html, settings):
        """Test that the page delay is applied before each follow-up page."""
        responses.add(
            responses.GET,
            settings.list_url(1),
            body=listing_html([], counter='[1/3쪽]'),
            status=200
        )
        for page_no in (2, 3):
            responses.add(
                responses.GET,
                settings.list_url(page_no),
                body=listing_html([]),
                status=200
            )

        crawler = FestivalListCrawler(McstClient(settings), settings)
        crawler.crawl()

        assert mock_sleep.call_args_list == [
            call(settings.page_delay_seconds),
            call(settings.page_delay_seconds),
        ]

    @responses.activate
    def test_sends_browser_user_agent(self, crawler, settings, listing_html):
        responses.add(responses.GET, settings.list_url(1), body=listing_html([]), status=200)

        crawler.crawl()

        assert responses.calls[0].request.headers['User-Agent'] == settings.user_agent
