"""Shared fixtures: settings and MCST-shaped HTML builders."""
import pytest

from settings import ScraperSettings


@pytest.fixture
def settings(tmp_path):
    """Settings with no politeness delays and output under tmp_path."""
    return ScraperSettings(
        output_path=tmp_path / 'src' / 'data' / 'festivals.js',
        page_delay_seconds=0,
        detail_delay_seconds=0
    )


@pytest.fixture
def listing_html():
    """Build a listing page from (name, period, place, href) tuples."""

    def build(items, counter=None, page_links=()):
        lis = []
        for name, period, place, href in items:
            anchor_open = f'<a class="go" href="{href}">' if href is not None else '<div>'
            anchor_close = '</a>' if href is not None else '</div>'
            sub_items = ''
            if period is not None:
                sub_items += f'<li>기간 : {period}</li>'
            if place is not None:
                sub_items += f'<li>장소 : {place}</li>'
            lis.append(
                f"""
                <li>
                    {anchor_open}
                        <div class="text festival">
                            <p class="sub-tit">{name}</p>
                            <ul class="list">{sub_items}</ul>
                        </div>
                    {anchor_close}
                </li>"""
            )

        counter_html = f'<p class="whole-count">{counter}</p>' if counter else ''
        links_html = ''.join(f'<a class="page-link" href="#">{n}</a>' for n in page_links)

        return f"""
        <html>
            <body>
                {counter_html}
                <ul class="thum-list">{''.join(lis)}</ul>
                <div class="pagination">{links_html}</div>
            </body>
        </html>
        """

    return build


@pytest.fixture
def detail_html():
    """Build a detail page; pass None to omit a field."""

    def build(
        title='영양 꽁꽁 겨울축제',
        period='2026. 1. 9. ~ 1. 25. | 10:00~17:00',
        region='경상북도 영양군',
        venue='영양읍 현리 빙상장일원',
        fee='유료',
        related_link='//www.yyg.go.kr/festival',
        homepage_link=None,
        image='/upload/festival/101.jpg',
        description='얼음 위에서 즐기는 겨울 축제',
    ):
        rows = []
        for label, value in (
            ('개최기간', period),
            ('개최지역', region),
            ('축제장소', venue),
            ('요금', fee),
        ):
            if value is not None:
                rows.append(f'<dt>{label}</dt><dd>{value}</dd>')
        if related_link is not None:
            rows.append(f'<dt>관련 누리집</dt><dd><a href="{related_link}">바로가기</a></dd>')
        if homepage_link is not None:
            rows.append(f'<dt>홈페이지</dt><dd><a href="{homepage_link}">바로가기</a></dd>')

        title_html = f'<h3 class="view_title">{title}</h3>' if title is not None else ''
        image_html = f'<img src="{image}" alt="">' if image is not None else ''
        description_html = (
            f'<div class="view_con">{description}</div>' if description is not None else ''
        )

        return f"""
        <html>
            <body>
                {title_html}
                <div class="culture_view festival">{image_html}</div>
                <dl class="board">{''.join(rows)}</dl>
                {description_html}
            </body>
        </html>
        """

    return build
