"""
Tests for the Cabinet Office holiday feed.

Tests cover:
- Decoding Shift_JIS / UTF-8 tables
- Refresh installs a new table, failures keep the current one
- Background refresh scheduling
"""
from datetime import date

import httpx
import pytest

from bizcal.calendars import HolidayTable, JapaneseHolidays
from bizcal.exceptions import ReloadAlreadyScheduledError
from bizcal.sources import CabinetOfficeFeed, decode_syukujitsu, parse_syukujitsu
from bizcal.sources import cabinet_office

URL = "https://example.com/syukujitsu.csv"

TABLE = (
    "国民の祝日・休日月日,国民の祝日・休日名称\r\n"
    "2030/1/1,元日\r\n"
    "2030/1/14,成人の日\r\n"
    "2030/12/30,特別休日\r\n"
)


def respond_with(content: bytes, status: int = 200):
    def fake_get(url, **kwargs):
        return httpx.Response(status, content=content, request=httpx.Request("GET", url))
    return fake_get


@pytest.fixture
def holidays() -> JapaneseHolidays:
    return JapaneseHolidays(HolidayTable.EMPTY)


class TestDecode:

    def test_shift_jis(self) -> None:
        assert decode_syukujitsu(TABLE.encode("shift_jis")) == TABLE

    def test_cp932_only_characters(self) -> None:
        text = "見出し\n2030/2/1,①記念日\n"
        assert decode_syukujitsu(text.encode("cp932")) == text

    def test_parse(self) -> None:
        table = parse_syukujitsu(TABLE)
        assert len(table) == 3
        assert table.get(date(2030, 12, 30)) == "japanese.特別休日"


class TestCabinetOfficeFeed:

    def test_refresh(self, monkeypatch, holidays) -> None:
        monkeypatch.setattr(cabinet_office.httpx, "get", respond_with(TABLE.encode("shift_jis")))
        feed = CabinetOfficeFeed(holidays, url=URL)
        assert feed.refresh() is True
        assert holidays.table.last_day == date(2030, 12, 30)
        assert holidays.name_for(date(2030, 12, 30)) == "japanese.特別休日"
        assert holidays.name_for(date(2030, 1, 14)) == "japanese.成人の日"

    def test_failed_fetch_keeps_table(self, monkeypatch, holidays, caplog) -> None:
        def fake_get(url, **kwargs):
            raise httpx.ConnectTimeout("timed out", request=httpx.Request("GET", url))
        monkeypatch.setattr(cabinet_office.httpx, "get", fake_get)

        feed = CabinetOfficeFeed(holidays, url=URL)
        assert feed.refresh() is False
        assert holidays.table is HolidayTable.EMPTY
        assert "failed to load holiday table" in caplog.text

    def test_error_status_keeps_table(self, monkeypatch, holidays) -> None:
        monkeypatch.setattr(cabinet_office.httpx, "get", respond_with(b"", status=503))
        assert CabinetOfficeFeed(holidays, url=URL).refresh() is False
        assert holidays.table is HolidayTable.EMPTY

    def test_malformed_table_keeps_table(self, monkeypatch, holidays) -> None:
        monkeypatch.setattr(cabinet_office.httpx, "get", respond_with(b"header\nnot,a,date\n"))
        assert CabinetOfficeFeed(holidays, url=URL).refresh() is False
        assert holidays.table is HolidayTable.EMPTY

    def test_empty_table_keeps_table(self, monkeypatch, holidays) -> None:
        monkeypatch.setattr(cabinet_office.httpx, "get", respond_with("見出し\n".encode("shift_jis")))
        assert CabinetOfficeFeed(holidays, url=URL).refresh() is False
        assert holidays.table is HolidayTable.EMPTY

    def test_url_from_settings(self, monkeypatch, holidays) -> None:
        monkeypatch.setenv("BIZCAL_SYUKUJITSU_URL", URL)
        assert CabinetOfficeFeed(holidays).url == URL

    def test_start_twice(self, monkeypatch, holidays) -> None:
        monkeypatch.setattr(cabinet_office.httpx, "get", respond_with(TABLE.encode("shift_jis")))
        feed = CabinetOfficeFeed(holidays, url=URL)
        feed.start(3600)
        try:
            assert len(holidays.table) == 3
            with pytest.raises(ReloadAlreadyScheduledError):
                feed.start(3600)
        finally:
            feed.stop()
