"""Server-rendered presentation: site header, dashboard header, spinner.

Markup lives in ``industryhunt/templates``; every page extends ``base.html``,
which carries the site header.
"""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

SITE_NAME = 'IndustryHuntBD'
LOGO_PATH = '/static/logo.svg'
TEMPLATES_DIR = Path(__file__).resolve().parent.parent / 'templates'


def show_auth_links(pathname: str) -> bool:
    """The login/sign up links are hidden on the auth pages."""
    return '/auth' not in pathname


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals.update(
    site_name=SITE_NAME,
    logo_path=LOGO_PATH,
    show_auth_links=show_auth_links,
)


def render_page(request: Request, template_name: str, title: str, **context) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        template_name,
        {'title': title, 'pathname': request.url.path, **context},
    )


def render_spinner(request: Request) -> HTMLResponse:
    return render_page(request, 'loading.html', 'Loading')
