from __future__ import annotations

from guardianbee.adapters.government import parse_crc, parse_ece, parse_kindyinfo, parse_ncwis

PAGE = "https://registry.test/page"


def test_parse_crc_reads_aria_rows(crc_html: str) -> None:
    records = parse_crc(crc_html, PAGE)

    assert records == [
        {
            "county": "臺北市",
            "target": "王小明",
            "violation": "兒童及少年福利與權益保障法第49條（身心虐待）",
            "date": "2025-01-15",
            "page_url": PAGE,
        },
        {
            "county": "高雄市",
            "target": "快樂幼兒園",
            "violation": "兒童及少年福利與權益保障法第49條",
            "date": "",
            "page_url": PAGE,
        },
    ]


def test_parse_crc_falls_back_to_table_rows() -> None:
    html = "<table><tbody><tr><td>新北市</td><td>李大同</td><td>體罰</td></tr></tbody></table>"

    records = parse_crc(html, PAGE)

    assert records == [
        {"county": "新北市", "target": "李大同", "violation": "體罰", "date": "", "page_url": PAGE}
    ]


def test_parse_ncwis_skips_header_rows(ncwis_html: str) -> None:
    records = parse_ncwis(ncwis_html, PAGE)

    assert [record["name"] for record in records] == ["陳小華", "小太陽托嬰中心"]
    assert records[0]["location"] == "臺中市"


def test_parse_ece_reads_punish_grid(ece_html: str) -> None:
    records = parse_ece(ece_html, PAGE)

    assert records == [
        {
            "kindergarten": "向日葵幼兒園",
            "violation": "不當管教幼兒",
            "date": "2024-03-05",
            "location": "桃園市",
            "page_url": PAGE,
        }
    ]


def test_parse_kindyinfo_drops_short_rows(kindyinfo_html: str) -> None:
    records = parse_kindyinfo(kindyinfo_html, PAGE)

    assert len(records) == 1
    assert records[0]["name"] == "彩虹幼兒園"
    assert records[0]["count"] == "2"
    assert records[0]["penalty"] == ""


def test_parsers_return_nothing_for_empty_pages() -> None:
    assert parse_crc("<html></html>", PAGE) == []
    assert parse_ncwis("<html></html>", PAGE) == []
