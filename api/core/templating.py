"""
Jinja2 rendering for the server-side pages and the transactional emails.

Layout:
- views/layouts/base.html   shared layout, pages extend it
- views/pages/<name>.html   one template per page
- views/emails/<name>.html  email bodies
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from fastapi import Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateNotFound

from core import settings

logger = logging.getLogger(__name__)


@dataclass
class PageData:
    title: str
    sub_title: str = ""
    current_episode: Any = None
    current_production: Any = None
    productions: list = field(default_factory=list)
    latest_episodes: list = field(default_factory=list)
    posts: list = field(default_factory=list)
    entry: Any = None
    tags: dict[str, str] = field(default_factory=dict)


def _format_price(value: Any) -> str:
    try:
        return f"{float(value):.2f} $"
    except (TypeError, ValueError):
        return ""


def _format_date(value: Any, fmt: str = "%Y-%m-%d") -> str:
    if value is None:
        return ""
    try:
        return value.strftime(fmt)
    except AttributeError:
        return str(value)


@lru_cache(maxsize=4)
def _templates_for(directory: str) -> Jinja2Templates:
    t = Jinja2Templates(directory=directory)
    t.env.filters["price"] = _format_price
    t.env.filters["date"] = _format_date
    return t


def templates() -> Jinja2Templates:
    # One environment per views directory; VIEWS_DIR is still read on every call.
    return _templates_for(str(settings.views_dir()))


def render(
    request: Request,
    page: str,
    data: PageData,
    *,
    status_code: int = 200,
) -> HTMLResponse:
    """
    Render `pages/<page>` inside the base layout.
    """
    name = f"pages/{page}"
    try:
        templates().get_template(name)
    except TemplateNotFound as exc:
        logger.error("template_missing name=%s", name)
        raise RuntimeError(f"The template {name} does not exist") from exc

    context = dict(vars(data), page=data)
    return templates().TemplateResponse(
        request,
        name,
        context,
        status_code=status_code,
    )


def redirect_to_error() -> RedirectResponse:
    return RedirectResponse("/error", status_code=status.HTTP_303_SEE_OTHER)


def render_email(template: str, /, **context: Any) -> str:
    """
    Render `emails/<template>` to a string.
    """
    return templates().get_template(f"emails/{template}").render(**context)
