import json
import logging
from datetime import date

import pytest

from compliance.engine import SUCCESS_MESSAGE
from config import RULE_OVERRIDES_ENV
from run_verification import _parse_args, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env_name in RULE_OVERRIDES_ENV.values():
        monkeypatch.delenv(env_name, raising=False)


@pytest.fixture
def save_snapshot(tmp_path, employee):
    def _save(schedule, current_date="2024-01-15", rules=None):
        path = tmp_path / "schedule.json"
        path.write_text(json.dumps({
            "schedule": schedule,
            "employees": [employee],
            "schedulingRules": rules or {},
            "currentDate": current_date,
        }), encoding="utf-8")
        return str(path)
    return _save


def test_clean_schedule_exits_zero(caplog, save_snapshot, fill_range, build_schedule):
    caplog.set_level(logging.INFO)
    path = save_snapshot(build_schedule(fill_range(date(2024, 1, 1), date(2024, 3, 31))))

    assert main(path) == 0
    assert SUCCESS_MESSAGE in caplog.text
    assert "Shift schedule - January 2024" in caplog.text


def test_blocking_issue_exits_one(caplog, save_snapshot, make_shift, build_schedule):
    caplog.set_level(logging.INFO)
    schedule = build_schedule({"2024-03-10": make_shift("day")})
    path = save_snapshot(schedule, current_date="2024-03-15", rules={"checkUnmarkedDays": False})

    assert main(path) == 1
    assert "[sunday_compensation]" in caplog.text
    assert "export is not allowed" in caplog.text


def test_reference_date_argument_wins(caplog, save_snapshot, make_shift, build_schedule):
    caplog.set_level(logging.INFO)
    schedule = build_schedule({"2024-03-10": make_shift("day")})
    path = save_snapshot(schedule, current_date="2024-03-15", rules={"checkUnmarkedDays": False})

    # In February the March Sunday is outside the checked month
    assert main(path, reference_date=date(2024, 2, 10), locale="pl") == 0
    assert "Grafik zmian - Luty 2024" in caplog.text


def test_missing_snapshot_exits_two(caplog, tmp_path):
    assert main(str(tmp_path / "nope.json")) == 2
    assert "Cannot read snapshot" in caplog.text


def test_parse_args():
    args = _parse_args(["saved.json", "--date", "2024-03-15", "--locale", "pl"])

    assert args.snapshot == "saved.json"
    assert args.reference_date == date(2024, 3, 15)
    assert args.locale == "pl"


def test_parse_args_defaults():
    args = _parse_args(["saved.json"])

    assert args.reference_date is None
    assert args.locale is None
