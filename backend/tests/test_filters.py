from dataclasses import dataclass
from datetime import date, timedelta

from campboard.filters import filter_people, filter_submissions

TODAY = date(2025, 7, 10)


@dataclass
class View:
    id: str
    camper_name: str
    camper_code: str
    bunk_id: str
    bunk_name: str
    status: str
    date: date


ROWS = [
    View("1", "Ada Lovelace", "ADA101", "bunk-a", "Aspen", "approved", TODAY),
    View("2", "Adam Smith", "ADM202", "bunk-b", "Birch", "approved", TODAY),
    View("3", "Ada Byron", "BYR303", "bunk-a", "Aspen", "submitted", TODAY - timedelta(days=1)),
    View("4", "Grace Hopper", "GRA404", "bunk-a", "Aspen", "approved", TODAY - timedelta(days=9)),
]


def _ids(rows):
    return {r.id for r in rows}


def test_combined_filters_intersect():
    by_name = _ids(filter_submissions(ROWS, search="ada"))
    by_status = _ids(filter_submissions(ROWS, status="approved"))
    by_bunk = _ids(filter_submissions(ROWS, bunk="Aspen"))
    combined = _ids(filter_submissions(ROWS, search="ada", status="approved", bunk="Aspen"))
    assert combined == by_name & by_status & by_bunk == {"1"}


def test_search_matches_code_and_bunk_case_insensitive():
    assert _ids(filter_submissions(ROWS, search="gra404")) == {"4"}
    assert _ids(filter_submissions(ROWS, search="birch")) == {"2"}


def test_all_means_no_filter_and_bunk_matches_id():
    assert len(filter_submissions(ROWS, status="all", bunk="all", date_filter="all", today=TODAY)) == 4
    assert _ids(filter_submissions(ROWS, bunk="bunk-b")) == {"2"}


def test_date_filters():
    assert _ids(filter_submissions(ROWS, date_filter="today", today=TODAY)) == {"1", "2"}
    assert _ids(filter_submissions(ROWS, date_filter="yesterday", today=TODAY)) == {"3"}
    assert _ids(filter_submissions(ROWS, date_filter="week", today=TODAY)) == {"1", "2", "3"}


@dataclass
class Person:
    name: str
    access_code: str
    bunk_id: str
    bunk_name: str


def test_filter_people():
    people = [
        Person("Ada", "ADA101", "bunk-a", "Aspen"),
        Person("Alan", "ALA303", "bunk-b", "Birch"),
    ]
    assert [p.name for p in filter_people(people, search="asp")] == ["Ada"]
    assert [p.name for p in filter_people(people, bunk="bunk-b")] == ["Alan"]
    assert filter_people(people, search="ada", bunk="bunk-b") == []
