from datetime import date, datetime, timedelta, timezone

from timesheet.filters import filter_entries, parse_filter_date
from timesheet.models import EntryFilter


def sample(make_entry):
    base = datetime(2024, 3, 10, 15, 0, tzinfo=timezone.utc)
    return [
        make_entry(project_name="a", project_type="BI", timestamp=base),
        make_entry(project_name="b", project_type="Outros", other_project_name="x", timestamp=base - timedelta(days=1)),
        make_entry(project_name="c", project_type="BI", user="Outro", timestamp=base - timedelta(days=5)),
        make_entry(project_name="d", project_type="BI", timestamp=base - timedelta(days=9)),
    ]


def names(entries):
    return [e.project_name for e in entries]


def test_default_criteria_keep_everything_in_order(make_entry):
    entries = sample(make_entry)

    assert filter_entries(entries, EntryFilter()) == entries


def test_project_type_filter(make_entry):
    result = filter_entries(sample(make_entry), EntryFilter(project_type="BI"))

    assert names(result) == ["a", "c", "d"]
    assert all(e.project_type == "BI" for e in result)


def test_date_range_narrows_monotonically(make_entry):
    entries = sample(make_entry)
    by_type = filter_entries(entries, EntryFilter(project_type="BI"))
    by_type_and_date = filter_entries(
        entries, EntryFilter(project_type="BI", date_from=date(2024, 3, 4), date_to=date(2024, 3, 10))
    )

    assert names(by_type_and_date) == ["a", "c"]
    assert set(names(by_type_and_date)) <= set(names(by_type))


def test_user_filter_and_inclusive_bounds(make_entry):
    entries = sample(make_entry)

    assert names(filter_entries(entries, EntryFilter(user="Outro"))) == ["c"]
    assert names(filter_entries(entries, EntryFilter(date_from=date(2024, 3, 9), date_to=date(2024, 3, 9)))) == ["b"]


def test_dates_compare_in_utc(make_entry):
    late_local = datetime(2024, 3, 10, 22, 30, tzinfo=timezone(timedelta(hours=-3)))
    entry = make_entry(timestamp=late_local)

    assert filter_entries([entry], EntryFilter(date_from=date(2024, 3, 11))) == [entry]


def test_source_list_is_not_modified(make_entry):
    entries = sample(make_entry)
    snapshot = list(entries)

    filter_entries(entries, EntryFilter(project_type="Outros"))

    assert entries == snapshot


def test_parse_filter_date():
    assert parse_filter_date("2024-03-01") == date(2024, 3, 1)
    assert parse_filter_date("") is None
