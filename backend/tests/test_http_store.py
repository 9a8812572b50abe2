from __future__ import annotations

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from timesheet.browser import EntriesBrowser
from timesheet.errors import CollaboratorError
from timesheet.form import EntryForm
from timesheet.models import EntryFilter, TimeEntry
from timesheet.store import HttpTimesheetStore

START = datetime(2024, 4, 1, 12, 0, tzinfo=timezone.utc)


def ticking_clock():
    ticks = iter(range(100))
    return lambda: START + timedelta(minutes=next(ticks))


def fill(form, **values):
    defaults = dict(project_name="ETL", project_type="BI", user="Lavezzo", start_time="08:00", end_time="12:00")
    defaults.update(values)
    form.update(**defaults)


def test_form_submits_through_the_service(client):
    store = HttpTimesheetStore(client)
    form = EntryForm(store, "me", clock=ticking_clock())
    fill(form)
    first = form.submit()
    fill(form, project_name="Dashboards", user="Outro", custom_rate="55,5", start_time="23:00", end_time="01:00")
    second = form.submit()

    assert [e.id for e in form.entries] == [second.id, first.id]
    assert form.entries[0].total_value == 111.0
    assert form.entries[1].total_value == 140.0
    assert form.entries[0].timestamp.tzinfo is not None


def test_fetched_record_keeps_full_precision(client):
    form = EntryForm(HttpTimesheetStore(client), "me", clock=ticking_clock())
    fill(form, user="Outro", custom_rate="12.345", start_time="09:00", end_time="09:20")

    saved = form.submit()
    fetched = form.entries[0]

    assert fetched.id == saved.id
    assert fetched.hourly_rate == saved.hourly_rate == 12.345
    assert fetched.total_hours == saved.total_hours
    assert fetched.total_value == saved.total_value == saved.total_hours * saved.hourly_rate


def test_browser_sees_every_identity(client):
    store = HttpTimesheetStore(client)
    for user_id in ("a", "b"):
        form = EntryForm(store, user_id, clock=ticking_clock())
        fill(form, project_type="Outros", other_project_name="Suporte")
        form.submit()
    other_form = EntryForm(store, "c", clock=ticking_clock())
    fill(other_form)
    other_form.submit()

    browser = EntriesBrowser(store, criteria=EntryFilter(project_type="Outros"))
    browser.load()

    assert len(browser.entries) == 3
    assert {e.user_id for e in browser.visible} == {"a", "b"}
    assert all(e.type_label == "Outros - Suporte" for e in browser.visible)


def test_transport_errors_become_collaborator_errors():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    store = HttpTimesheetStore(httpx.Client(base_url="http://timesheets.test", transport=httpx.MockTransport(refuse)))

    with pytest.raises(CollaboratorError) as excinfo:
        store.select_all()
    assert excinfo.value.operation == "select"


def test_rejected_insert_becomes_collaborator_error():
    entry = TimeEntry(
        project_name="ETL",
        project_type="BI",
        user="Lavezzo",
        hourly_rate=35.0,
        start_time="08:00",
        end_time="12:00",
        total_hours=4.0,
        total_value=140.0,
        timestamp=START,
        user_id="me",
    )
    store = HttpTimesheetStore(
        httpx.Client(
            base_url="http://timesheets.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(500, json={"detail": "boom"})),
        )
    )

    with pytest.raises(CollaboratorError) as excinfo:
        store.insert(entry)
    assert excinfo.value.operation == "insert"
