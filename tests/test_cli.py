"""
Tests for the bizcal command line.
"""
import json

import pytest

from bizcal.cli import main


class TestHolidaysCommand:

    def test_text(self, monkeypatch, capsys) -> None:
        monkeypatch.setenv("BIZCAL_LOCALE", "en")
        assert main(["holidays", "--from", "2024-05-01", "--to", "2024-05-07"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "2024-05-03  Constitution Memorial Day",
            "2024-05-04  Greenery Day",
            "2024-05-05  Children's Day",
            "2024-05-06  Holiday",
        ]

    def test_json(self, capsys) -> None:
        assert main(["--json", "holidays", "--from", "2024-05-03", "--to", "2024-05-03"]) == 0
        assert json.loads(capsys.readouterr().out) == [
            {"date": "2024-05-03", "name": "憲法記念日", "key": "japanese.憲法記念日"},
        ]

    def test_united_states(self, capsys) -> None:
        argv = ["--calendar", "united-states", "--locale", "en",
                "holidays", "--from", "2021-07-01", "--to", "2021-07-31"]
        assert main(argv) == 0
        assert capsys.readouterr().out.splitlines() == [
            "2021-07-04  Independence Day",
            "2021-07-05  Independence Day (observed)",
        ]

    def test_bad_date(self) -> None:
        with pytest.raises(SystemExit):
            main(["holidays", "--from", "2024/05/01", "--to", "2024-05-07"])


class TestCheckCommand:

    def test_holiday_with_time(self, capsys) -> None:
        argv = ["--locale", "en", "--weekends", "--hours", "9-12,13-18", "--json",
                "check", "2024-05-06", "--time", "10:30"]
        assert main(argv) == 0
        assert json.loads(capsys.readouterr().out) == {
            "date": "2024-05-06",
            "business_day": False,
            "holiday": "Holiday",
            "slots": [],
            "business_hour": False,
            "next_business_hour_start": "2024-05-07T09:00:00",
            "next_business_hour_end": "2024-05-07T12:00:00",
        }

    def test_business_day_text(self, capsys) -> None:
        assert main(["--weekends", "--hours", "9-12,13-18", "check", "2024-05-07"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "2024-05-07: business day",
            "  hours: 09:00-12:00, 13:00-18:00",
        ]

    def test_invalid_hours(self, capsys) -> None:
        assert main(["--hours", "10-9", "check", "2024-05-07"]) == 1
        error = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert error["code"] == "BC_SLOT_ORDER_ERROR"


class TestDumpCommand:

    def test_dump(self, capsys) -> None:
        argv = ["--hours", "9-18", "dump", "--from", "2024-05-02", "--to", "2024-05-03"]
        assert main(argv) == 0
        assert capsys.readouterr().out.splitlines() == [
            "2024/05/02 : 09:00-18:00",
            "2024/05/03 : 憲法記念日",
        ]

    def test_rules_file(self, rules_file, capsys) -> None:
        path = rules_file("holiday,2024/05/02,Office move", "hours,10-16")
        argv = ["--rules", str(path), "dump", "--from", "2024-05-01", "--to", "2024-05-02",
                "--date-format", "%m-%d"]
        assert main(argv) == 0
        assert capsys.readouterr().out.splitlines() == [
            "05-01 : 10:00-16:00",
            "05-02 : Office move",
        ]

    def test_pack(self, tmp_path, capsys) -> None:
        pack = tmp_path / "office.yaml"
        pack.write_text(
            "name: office\n"
            "locale: en\n"
            "holidays:\n"
            "  - builtin: japan.public_holidays\n"
            "  - builtin: weekends\n"
            "hours:\n"
            "  - slots: '9-17'\n",
            encoding="utf-8",
        )
        argv = ["--pack", str(pack), "dump", "--from", "2024-05-03", "--to", "2024-05-07"]
        assert main(argv) == 0
        assert capsys.readouterr().out.splitlines() == [
            "2024/05/03 : Constitution Memorial Day",
            "2024/05/04 : Greenery Day",
            "2024/05/05 : Children's Day",
            "2024/05/06 : Holiday",
            "2024/05/07 : 09:00-17:00",
        ]

    def test_missing_pack(self, tmp_path, capsys) -> None:
        assert main(["--pack", str(tmp_path / "none.yaml"), "dump",
                     "--from", "2024-05-03", "--to", "2024-05-07"]) == 1
        assert json.loads(capsys.readouterr().err.strip().splitlines()[-1])["code"] == "BC_PACK_LOAD_ERROR"
