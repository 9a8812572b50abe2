from __future__ import annotations
import argparse
from pathlib import Path

from .browser import EntriesBrowser
from .calculator import calculate
from .config import ClientSettings, get_settings
from .filters import ALL, parse_filter_date
from .form import EntryForm
from .identity import LocalIdentity
from .logging import configure_logging
from .models import EntryFilter, Notification, PROJECT_TYPES, USERS
from .store import TimesheetStore, store_from_settings
from .views import format_entries, format_entry
from .web import serve


def settings_from_args(args: argparse.Namespace) -> ClientSettings:
    overrides = {}
    if args.api_url:
        overrides["api_url"] = args.api_url
    if args.data:
        overrides["data_path"] = Path(args.data)
    if args.identity:
        overrides["identity_path"] = Path(args.identity)
    return get_settings().model_copy(update=overrides)


def store_from_args(args: argparse.Namespace) -> TimesheetStore:
    return store_from_settings(settings_from_args(args))


def print_notification(notification: Notification) -> None:
    print(f"{notification.title} {notification.message}")


def build_form(args: argparse.Namespace) -> EntryForm:
    settings = settings_from_args(args)
    user_id = LocalIdentity(settings.identity_path).get_or_create()
    return EntryForm(
        store_from_settings(settings),
        user_id,
        simulated_latency=settings.simulated_latency,
        on_notify=print_notification,
    )


def cmd_preview(args: argparse.Namespace) -> int:
    calculation = calculate(args.start, args.end, args.user, args.project_type, args.rate)
    print(f"Horas Trabalhadas: {calculation.duration_label}")
    print(f"Valor Total: {calculation.value_label}")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    form = build_form(args)
    form.update(
        project_name=args.name,
        project_type=args.project_type,
        other_project_name=args.description,
        user=args.user,
        custom_rate=args.rate,
        start_time=args.start,
        end_time=args.end,
    )
    saved = form.submit()
    if saved is None:
        return 1
    print(format_entry(saved))
    return 0


def cmd_mine(args: argparse.Namespace) -> int:
    form = build_form(args)
    entries = form.refresh()
    if form.notifications:
        return 1
    print(format_entries(entries))
    return 0


def cmd_entries(args: argparse.Namespace) -> int:
    criteria = EntryFilter(
        project_type=args.project_type,
        user=args.user,
        date_from=args.date_from,
        date_to=args.date_to,
    )
    browser = EntriesBrowser(store_from_args(args), criteria=criteria, on_notify=print_notification)
    browser.load()
    if browser.notifications:
        return 1
    print(format_entries(browser.visible))
    return 0


def cmd_whoami(args: argparse.Namespace) -> int:
    settings = settings_from_args(args)
    print(LocalIdentity(settings.identity_path).get_or_create())
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    settings = settings_from_args(args)
    serve(store_from_settings(settings), host=args.host, port=args.port, simulated_latency=settings.simulated_latency)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Timesheet entry CLI")
    parser.add_argument("--api-url", help="Timesheet service URL (defaults to TIMESHEET_API_URL)")
    parser.add_argument("--data", help="Local JSON datastore used when no service URL is set")
    parser.add_argument("--identity", help="File holding the local pseudo-identity")
    sub = parser.add_subparsers(dest="command", required=True)

    preview = sub.add_parser("preview", help="Show duration and value without saving")
    preview.add_argument("start", help="Clock-in time, HH:MM")
    preview.add_argument("end", help="Clock-out time, HH:MM")
    preview.add_argument("--user", choices=USERS, required=True)
    preview.add_argument("--project-type", choices=PROJECT_TYPES, required=True)
    preview.add_argument("--rate", default="", help="Hourly rate when user is Outro")
    preview.set_defaults(func=cmd_preview)

    add = sub.add_parser("add", help="Record a time entry")
    add.add_argument("name", help="Project name")
    add.add_argument("start", help="Clock-in time, HH:MM")
    add.add_argument("end", help="Clock-out time, HH:MM")
    add.add_argument("--user", choices=USERS, required=True)
    add.add_argument("--project-type", choices=PROJECT_TYPES, required=True)
    add.add_argument("--description", default="", help="Project description, required for Outros")
    add.add_argument("--rate", default="", help="Hourly rate when user is Outro")
    add.set_defaults(func=cmd_add)

    mine = sub.add_parser("mine", help="List entries recorded by this identity")
    mine.set_defaults(func=cmd_mine)

    entries = sub.add_parser("entries", help="List and filter all entries")
    entries.add_argument("--project-type", choices=[ALL] + PROJECT_TYPES, default=ALL)
    entries.add_argument("--user", choices=[ALL] + USERS, default=ALL)
    entries.add_argument("--from", dest="date_from", type=parse_filter_date, help="First day, YYYY-MM-DD")
    entries.add_argument("--to", dest="date_to", type=parse_filter_date, help="Last day, YYYY-MM-DD")
    entries.set_defaults(func=cmd_entries)

    whoami = sub.add_parser("whoami", help="Print the local pseudo-identity")
    whoami.set_defaults(func=cmd_whoami)

    serve_web = sub.add_parser("serve", help="Run the web form")
    serve_web.add_argument("--host", default="127.0.0.1")
    serve_web.add_argument("--port", type=int, default=8000)
    serve_web.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(get_settings().log_level)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
