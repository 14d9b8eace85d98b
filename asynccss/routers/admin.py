# -*- coding: utf-8 -*-
"""Location: ./asynccss/routers/admin.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Async CSS options page.
Lets an operator choose which of the stylesheet handles observed on the last
front-end render are loaded asynchronously. Submitting the form replaces the
whitelist wholesale: unchecked handles are removed.
"""

# Standard
import logging
from pathlib import Path

# Third-Party
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

# First-Party
from asynccss.config import settings
from asynccss.services.option_service import get_option_service, OptionService

logger = logging.getLogger(__name__)

WHITELIST_FIELD = "whitelisted_handles"

template_dir = Path(__file__).resolve().parents[1] / "templates"
_jinja = Environment(loader=FileSystemLoader(str(template_dir)), autoescape=select_autoescape(["html", "xml"]))

router = APIRouter(tags=["Admin"])


def render_options_page(service: OptionService, updated: bool = False) -> str:
    """Render the options form.

    Args:
        service: the option service to read the whitelist and observed handles from.
        updated: whether to show the saved notice.

    Returns:
        The page markup.
    """
    options = service.load_options()
    template = _jinja.get_template("async_css_options.html")
    return template.render(
        title=settings.app_name,
        field_name=WHITELIST_FIELD,
        handles=options.observed_handles,
        whitelist=options.whitelist,
        updated=updated,
    )


@router.get("", response_class=HTMLResponse, name="async_css_options_page")
async def options_page(updated: bool = False, service: OptionService = Depends(get_option_service)) -> HTMLResponse:
    """Show the options page.

    Args:
        updated: set after a successful submission.
        service: the option service.

    Returns:
        HTMLResponse: the rendered form.
    """
    return HTMLResponse(content=render_options_page(service, updated=updated))


@router.post("", name="async_css_save_options")
async def save_options(request: Request, service: OptionService = Depends(get_option_service)) -> RedirectResponse:
    """Persist the checked handles as the new whitelist.

    Args:
        request: the form submission.
        service: the option service.

    Returns:
        RedirectResponse: back to the options page.
    """
    form = await request.form()
    handles = [str(value) for value in form.getlist(WHITELIST_FIELD) if str(value)]
    service.save_whitelist(handles)
    logger.info("Async CSS whitelist updated with %d handles", len(set(handles)))
    return RedirectResponse(url=f"{request.url_for('async_css_options_page')}?updated=true", status_code=303)
