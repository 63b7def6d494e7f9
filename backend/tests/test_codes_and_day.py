import random
import re
from datetime import date, datetime, timezone

from campboard.camp_day import camp_today, week_days
from campboard.codes import assign_code, generate_camper_code, generate_unique_code


def test_camper_code_shape():
    code = generate_camper_code("Ada Lovelace", "aspen", random.Random(1))
    assert re.fullmatch(r"ALA\d{3}", code)


def test_unique_code_avoids_existing():
    rng = random.Random(7)
    first = generate_unique_code(set(), random.Random(7))
    code = generate_unique_code({first}, rng)
    assert code != first
    assert re.fullmatch(r"[B-DF-HJ-NP-TV-Z][AEIOU][B-DF-HJ-NP-TV-Z]\d{3}", code)


def test_assign_code_falls_back_on_collision():
    existing = {f"ALA{n}" for n in range(100, 1000)}
    code = assign_code("Ada Lovelace", "aspen", existing)
    assert code not in existing


def test_camp_today_respects_timezone_and_reset_hour():
    now = datetime(2025, 7, 10, 2, 30, tzinfo=timezone.utc)
    assert camp_today("UTC", 0, now) == date(2025, 7, 10)
    assert camp_today("UTC", 4, now) == date(2025, 7, 9)
    assert camp_today("America/New_York", 0, now) == date(2025, 7, 9)


def test_camp_today_unknown_zone_uses_utc():
    now = datetime(2025, 7, 10, 12, 0, tzinfo=timezone.utc)
    assert camp_today("Not/AZone", 0, now) == date(2025, 7, 10)


def test_week_days():
    days = week_days(date(2025, 7, 7))
    assert len(days) == 7
    assert days[0] == date(2025, 7, 7) and days[-1] == date(2025, 7, 13)
