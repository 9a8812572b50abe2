from __future__ import annotations
from html import escape
from http import HTTPStatus
from http.cookies import SimpleCookie
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from .browser import EntriesBrowser
from .calculator import format_currency, format_hours, format_rate
from .errors import CollaboratorError
from .filters import ALL, parse_filter_date
from .form import EntryForm, draft_from_mapping
from .identity import IDENTITY_KEY, new_identity
from .logging import get_logger
from .models import EntryDraft, EntryFilter, ProjectType, UserChoice, PROJECT_TYPES, USERS
from .store import TimesheetStore

logger = get_logger(__name__)

COOKIE_MAX_AGE = 10 * 365 * 24 * 3600


def render_layout(title, body, notifications=()):
    notices = "".join(
        f"<div class='notice {'error' if n.is_error else 'ok'}'><strong>{escape(n.title)}</strong> {escape(n.message)}</div>"
        for n in notifications
    )
    return f"""<!DOCTYPE html>
<html lang='pt-BR'>
<head>
    <meta charset='UTF-8'>
    <title>{escape(title)}</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 24px; background: #f8f9fb; }}
        main {{ max-width: 960px; margin: 0 auto; }}
        header {{ margin-bottom: 16px; text-align: center; }}
        nav a {{ margin-right: 12px; }}
        .card {{ background: #fff; padding: 16px; margin-bottom: 16px; border-radius: 8px; box-shadow: 0 1px 3px rgba(0,0,0,0.08); }}
        .entry {{ border-left: 4px solid #4f46e5; }}
        label {{ display: block; margin: 8px 0 4px; }}
        input, select {{ width: 100%; padding: 8px; box-sizing: border-box; }}
        .two-col {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(220px, 1fr)); gap: 12px; }}
        .summary {{ display: flex; justify-content: space-between; font-size: 20px; font-weight: bold; }}
        .muted {{ color: #666; font-size: 13px; }}
        .notice {{ padding: 12px; border-radius: 8px; margin-bottom: 16px; }}
        .notice.ok {{ background: #e7f7ec; }}
        .notice.error {{ background: #fde8e8; }}
    </style>
</head>
<body>
<main>
<header>
    <h1>{escape(title)}</h1>
    <nav>
        <a href='/'>Apontamento de Horas</a>
        <a href='/entries'>Todos os Apontamentos</a>
    </nav>
</header>
{notices}
{body}
</main>
</body>
</html>"""


def parse_post(environ):
    try:
        length = int(environ.get("CONTENT_LENGTH") or "0")
    except ValueError:
        length = 0
    body = environ["wsgi.input"].read(length) if length else b""
    return {key: values[0] for key, values in parse_qs(body.decode("utf-8", errors="replace")).items()}


def get_path(environ):
    return environ.get("PATH_INFO", "") or "/"


def get_query(environ):
    return {key: values[0] for key, values in parse_qs(environ.get("QUERY_STRING", "")).items()}


def read_identity(environ):
    """Return the caller's pseudo-identity and whether it was just generated."""
    cookie = SimpleCookie(environ.get("HTTP_COOKIE", ""))
    morsel = cookie.get(IDENTITY_KEY)
    if morsel and morsel.value:
        return morsel.value, False
    return new_identity(), True


def identity_cookie(user_id):
    cookie = SimpleCookie()
    cookie[IDENTITY_KEY] = user_id
    cookie[IDENTITY_KEY]["path"] = "/"
    cookie[IDENTITY_KEY]["max-age"] = COOKIE_MAX_AGE
    cookie[IDENTITY_KEY]["samesite"] = "Lax"
    return cookie[IDENTITY_KEY].OutputString()


def options(values, selected, placeholder=None):
    rendered = []
    if placeholder is not None:
        rendered.append(f"<option value=''>{escape(placeholder)}</option>")
    for value, label in values:
        mark = "selected" if value == selected else ""
        rendered.append(f"<option value='{escape(value)}' {mark}>{escape(label)}</option>")
    return "".join(rendered)


def render_entry(entry):
    return f"""
    <div class='card entry'>
        <div class='two-col'>
            <div>
                <h3>{escape(entry.project_name)}</h3>
                <p class='muted'>Tipo: {escape(entry.type_label)}</p>
                <p class='muted'>{escape(entry.user)} - {format_rate(entry.hourly_rate)}</p>
            </div>
            <div style='text-align: right;'>
                <p>{format_hours(entry.total_hours)}</p>
                <p><strong>{format_currency(entry.total_value)}</strong></p>
            </div>
        </div>
    </div>
    """


def render_form(form: EntryForm):
    draft = form.draft
    calculation = form.preview
    other_description = ""
    if draft.project_type == ProjectType.OTHER.value:
        other_description = f"""
            <div>
                <label for='other_project_name'>Descrição do Projeto</label>
                <input id='other_project_name' name='other_project_name' value='{escape(draft.other_project_name)}' placeholder='Descreva o tipo de projeto'>
            </div>"""
    user = UserChoice.parse(draft.user)
    custom_rate = ""
    if user is UserChoice.OTHER:
        custom_rate = f"""
            <div>
                <label for='custom_rate'>Valor por Hora (R$)</label>
                <input id='custom_rate' name='custom_rate' type='number' step='0.01' value='{escape(draft.custom_rate)}' placeholder='0.00'>
            </div>"""
    disabled = "" if form.can_submit else "disabled"
    return f"""
    <form method='post' action='/' class='card' onsubmit="this.querySelectorAll('button').forEach(b => b.disabled = true)">
        <h2>Novo Apontamento</h2>
        <div class='two-col'>
            <div>
                <label for='project_name'>Nome do Projeto</label>
                <input id='project_name' name='project_name' value='{escape(draft.project_name)}' placeholder='Digite o nome do projeto'>
            </div>
            <div>
                <label for='project_type'>Tipo de Projeto</label>
                <select id='project_type' name='project_type'>{options([(t, t) for t in PROJECT_TYPES], draft.project_type, 'Selecione o tipo')}</select>
            </div>
            {other_description}
            <div>
                <label for='user'>Usuário</label>
                <select id='user' name='user'>{options([(u, u) for u in USERS], user.value if user else '', 'Selecione o usuário')}</select>
            </div>
            {custom_rate}
            <div>
                <label for='start_time'>Hora de Entrada</label>
                <input id='start_time' name='start_time' type='time' value='{escape(draft.start_time)}'>
            </div>
            <div>
                <label for='end_time'>Hora de Saída</label>
                <input id='end_time' name='end_time' type='time' value='{escape(draft.end_time)}'>
            </div>
        </div>
        <div class='card summary'>
            <div>Horas Trabalhadas: <span id='duration'>{calculation.duration_label}</span></div>
            <div>Valor Total: <span id='value'>{calculation.value_label}</span></div>
        </div>
        <button type='submit' formaction='/preview'>Calcular</button>
        <button type='submit' {disabled}>Salvar Apontamento</button>
    </form>
    """


def render_entry_form_page(form: EntryForm):
    entries = ""
    if form.entries:
        entries = "<h2>Apontamentos Anteriores</h2>" + "".join(render_entry(e) for e in form.entries)
    body = f"""
    <p class='muted' style='text-align: center;'>Registre suas horas de trabalho em projetos</p>
    {render_form(form)}
    {entries}
    """
    return render_layout("Apontamento de Horas", body, form.notifications)


def filter_from_query(query):
    def safe_date(value):
        try:
            return parse_filter_date(value)
        except ValueError:
            return None

    return EntryFilter(
        project_type=query.get("project_type") or ALL,
        user=query.get("user") or ALL,
        date_from=safe_date(query.get("date_from")),
        date_to=safe_date(query.get("date_to")),
    )


def render_entries_page(browser: EntriesBrowser):
    criteria = browser.criteria
    filter_form = f"""
    <form method='get' action='/entries' class='card'>
        <h2>Filtros</h2>
        <div class='two-col'>
            <div>
                <label for='filter_project_type'>Tipo de Projeto</label>
                <select id='filter_project_type' name='project_type'>{options([(ALL, 'Todos os tipos')] + [(t, t) for t in PROJECT_TYPES], criteria.project_type)}</select>
            </div>
            <div>
                <label for='filter_user'>Usuário</label>
                <select id='filter_user' name='user'>{options([(ALL, 'Todos os usuários')] + [(u, u) for u in USERS], criteria.user)}</select>
            </div>
            <div>
                <label for='filter_date_from'>Data Inicial</label>
                <input id='filter_date_from' name='date_from' type='date' value='{criteria.date_from or ''}'>
            </div>
            <div>
                <label for='filter_date_to'>Data Final</label>
                <input id='filter_date_to' name='date_to' type='date' value='{criteria.date_to or ''}'>
            </div>
        </div>
        <div style='margin-top: 12px;'>
            <button type='submit'>Filtrar</button>
            <a href='/entries' style='margin-left: 8px;'>Limpar Filtros</a>
        </div>
    </form>
    """
    visible = browser.visible
    rows = "".join(render_entry(e) for e in visible) or "<p class='muted'>Nenhum apontamento encontrado.</p>"
    body = f"""
    <p class='muted' style='text-align: center;'>Visualize e filtre todos os apontamentos de horas.</p>
    {filter_form}
    <div class='card'>
        <h2>Apontamentos</h2>
        {rows}
    </div>
    """
    return render_layout("Todos os Apontamentos", body, browser.notifications)


def create_app(store: TimesheetStore, *, simulated_latency: float = 0.0):
    """Build the WSGI application for the entry form and the entries browser."""

    def new_form(user_id, draft: EntryDraft | None = None):
        form = EntryForm(store, user_id, simulated_latency=simulated_latency)
        if draft is not None:
            form.draft = draft
        return form

    def entry_form_page(environ, user_id):
        form = new_form(user_id)
        form.refresh()
        return HTTPStatus.OK, render_entry_form_page(form)

    def preview_entry(environ, user_id):
        form = new_form(user_id, draft_from_mapping(parse_post(environ)))
        form.refresh()
        return HTTPStatus.OK, render_entry_form_page(form)

    def submit_entry(environ, user_id):
        form = new_form(user_id, draft_from_mapping(parse_post(environ)))
        saved = form.submit()
        if saved is None:
            failed_upstream = isinstance(form.last_error, CollaboratorError)
            status = HTTPStatus.BAD_GATEWAY if failed_upstream else HTTPStatus.BAD_REQUEST
            form.refresh()
            return status, render_entry_form_page(form)
        return HTTPStatus.OK, render_entry_form_page(form)

    def entries_page(environ, user_id):
        browser = EntriesBrowser(store, criteria=filter_from_query(get_query(environ)))
        browser.load()
        return HTTPStatus.OK, render_entries_page(browser)

    routes = {
        ("GET", "/"): entry_form_page,
        ("POST", "/"): submit_entry,
        ("POST", "/preview"): preview_entry,
        ("GET", "/entries"): entries_page,
    }

    def application(environ, start_response):
        method = environ["REQUEST_METHOD"]
        path = get_path(environ)
        handler = routes.get((method, path))
        if not handler:
            start_response(f"{HTTPStatus.NOT_FOUND.value} Not Found", [("Content-Type", "text/plain")])
            return [b"Not found"]
        user_id, is_new = read_identity(environ)
        status, body = handler(environ, user_id)
        headers = [("Content-Type", "text/html; charset=utf-8")]
        if is_new:
            headers.append(("Set-Cookie", identity_cookie(user_id)))
        logger.info("request", method=method, path=path, status=status.value)
        start_response(f"{status.value} {status.phrase}", headers)
        return [body.encode("utf-8")]

    return application


def serve(store: TimesheetStore, host: str = "127.0.0.1", port: int = 8000, simulated_latency: float = 0.0) -> None:
    with make_server(host, port, create_app(store, simulated_latency=simulated_latency)) as httpd:
        logger.info("serving", url=f"http://{host}:{port}")
        httpd.serve_forever()
