from datetime import date, datetime, timezone

from timesheet.browser import LOAD_FAILED_MESSAGE, EntriesBrowser
from timesheet.models import EntryFilter


def test_load_fetches_every_identity(store, make_entry):
    store.entries = [make_entry(user_id="a"), make_entry(user_id="b")]
    browser = EntriesBrowser(store)

    browser.load()

    assert store.select_calls == [None]
    assert len(browser.visible) == 2


def test_visible_follows_filter_changes(store, make_entry):
    store.entries = [
        make_entry(id="1", project_type="BI", timestamp=datetime(2024, 3, 1, tzinfo=timezone.utc)),
        make_entry(id="2", project_type="Outros", other_project_name="x", timestamp=datetime(2024, 3, 2, tzinfo=timezone.utc)),
        make_entry(id="3", project_type="BI", timestamp=datetime(2024, 3, 3, tzinfo=timezone.utc)),
    ]
    browser = EntriesBrowser(store)
    browser.load()

    assert [e.id for e in browser.set_filter(project_type="BI")] == ["3", "1"]
    assert [e.id for e in browser.set_filter(date_from=date(2024, 3, 2))] == ["3"]
    assert [e.id for e in browser.clear_filters()] == ["3", "2", "1"]
    assert browser.criteria == EntryFilter()
    assert len(browser.entries) == 3


def test_failed_load_leaves_empty_list(store, make_entry):
    store.entries = [make_entry()]
    store.fail_select = True
    browser = EntriesBrowser(store)

    assert browser.load() == []
    assert browser.visible == []
    assert browser.notifications[0].message == LOAD_FAILED_MESSAGE
