"""Serialization of festival records into the generated JS data module."""
import logging
import os
import tempfile
from pathlib import Path
from typing import List

from processor.models import FestivalRecord

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 800

# (JS key, FestivalRecord attribute) in output order, after "id"
FIELDS = [
    ('name', 'name'),
    ('location', 'location'),
    ('address', 'address'),
    ('startDate', 'start_date'),
    ('endDate', 'end_date'),
    ('periodText', 'period_text'),
    ('description', 'description'),
    ('sourceUrl', 'source_url'),
    ('homepageUrl', 'homepage_url'),
    ('imageUrl', 'image_url'),
    ('feeText', 'fee_text'),
]

_JS_ESCAPES = str.maketrans({
    '\\': '\\\\',
    '\r': '\\r',
    '\n': '\\n',
    '\t': '\\t',
    "'": "\\'",
})


def escape_js_string(value) -> str:
    """Escape a value for embedding in a single-quoted JS string literal."""
    if value is None:
        return ''
    return str(value).translate(_JS_ESCAPES)


def _format_record(festival_id: int, record: FestivalRecord) -> str:
    lines = [f"    id: {festival_id},"]
    for key, attribute in FIELDS:
        value = getattr(record, attribute)
        if attribute == 'description':
            value = (value or '')[:MAX_DESCRIPTION_LENGTH]
        lines.append(f"    {key}: '{escape_js_string(value)}',")
    return "  {\n" + "\n".join(lines) + "\n  }"


def serialize(records: List[FestivalRecord], source_url: str = '') -> str:
    """
    Render records as an ES module exporting `festivals` and `getRegions`.

    Ids are assigned 1..N in the given order. The output depends only on
    the arguments, so the same input always renders identical text.

    Args:
        records: Festivals in display order
        source_url: Listing page noted in the file header

    Returns:
        JavaScript module source
    """
    body = ",\n".join(
        _format_record(index, record) for index, record in enumerate(records, start=1)
    )

    return (
        "// 문화체육관광부 지역축제(목록보기) 기반 데이터\n"
        f"// - 참고 페이지: {source_url}\n"
        "// - 이 파일은 update_festivals.py 에 의해 자동 생성됩니다.\n"
        "\n"
        "export const festivals = [\n"
        f"{body}\n"
        "];\n"
        "\n"
        "export const getRegions = () => {\n"
        "  const regions = [...new Set(festivals.map(festival => festival.location))];\n"
        "  return regions.sort();\n"
        "};\n"
    )


class FestivalsWriter:
    """Writes the generated festivals module, replacing any previous version."""

    def __init__(self, output_path: Path, source_url: str = ''):
        self.output_path = Path(output_path)
        self.source_url = source_url

    def write(self, records: List[FestivalRecord]) -> Path:
        """
        Serialize records and atomically replace the output file.

        Args:
            records: Festivals in display order

        Returns:
            Path of the written file
        """
        content = serialize(records, self.source_url)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=self.output_path.parent,
            prefix=f".{self.output_path.name}.",
            suffix='.tmp'
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)
            os.replace(tmp_path, self.output_path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

        logger.info(f"Wrote {len(records)} festivals to {self.output_path}")
        return self.output_path
