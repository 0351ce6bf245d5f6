"""Shared fixtures for government registry adapter tests."""

from __future__ import annotations

import pytest

CRC_HTML = """
<div role="table">
  <div role="row"><span role="columnheader">縣市</span><span role="columnheader">對象</span></div>
  <div role="row">
    <span role="cell">臺北市</span>
    <span role="cell"><a href="/detail/1">王小明</a></span>
    <span role="cell">兒童及少年福利與權益保障法第49條（身心虐待）</span>
    <span role="cell">2025-01-15</span>
  </div>
  <div role="row">
    <span role="cell">高雄市</span>
    <span role="cell">快樂幼兒園</span>
    <span role="cell">兒童及少年福利與權益保障法第49條</span>
    <span role="cell"></span>
  </div>
</div>
"""

NCWIS_HTML = """
<table>
  <thead><tr><th>姓名</th><th>類別</th><th>違規事項</th><th>日期</th><th>地區</th></tr></thead>
  <tbody>
    <tr><td>陳小華</td><td>居家托育人員</td><td>照顧不當致幼兒受傷</td><td>2024-01-10</td><td>臺中市</td></tr>
    <tr><td>小太陽托嬰中心</td><td>托嬰中心</td><td>超收幼兒</td><td>2024-02-01</td><td>新北市</td></tr>
  </tbody>
</table>
"""

ECE_HTML = """
<table id="gvPunish">
  <tr><th>幼兒園</th><th>違規</th><th>日期</th><th>地點</th></tr>
  <tr><td>向日葵幼兒園</td><td>不當管教幼兒</td><td>2024-03-05</td><td>桃園市</td></tr>
</table>
"""

KINDYINFO_HTML = """
<table>
  <tr><th>日期</th><th>縣市</th><th>區域</th><th>名稱</th><th>次數</th></tr>
  <tr><td>2023-11-20</td><td>台南市</td><td>東區</td><td>彩虹幼兒園</td><td>2</td></tr>
  <tr><td>短列</td><td>台南市</td></tr>
</table>
"""


@pytest.fixture
def crc_html() -> str:
    return CRC_HTML


@pytest.fixture
def ncwis_html() -> str:
    return NCWIS_HTML


@pytest.fixture
def ece_html() -> str:
    return ECE_HTML


@pytest.fixture
def kindyinfo_html() -> str:
    return KINDYINFO_HTML
