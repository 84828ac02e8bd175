"""
Boletim portal scraping domain.

Emulates the portal's browser workflow: form submission, session-bound
redirect, result page.
"""

from boletim.contexts.scraping.requests import (
    new_portal_session,
    portal_request,
)
from boletim.contexts.scraping.session import (
    send_form_request,
    extract_redirect_url,
    parse_cookies,
)
from boletim.contexts.scraping.locator import get_boletim_url
from boletim.contexts.scraping.orchestration import (
    fetch_boletim,
    fetch_boletim_from_query,
    setup_logger,
)
from boletim.contexts.scraping.envelope import render_envelope

__all__ = [
    "new_portal_session",
    "portal_request",
    "send_form_request",
    "extract_redirect_url",
    "parse_cookies",
    "get_boletim_url",
    "fetch_boletim",
    "fetch_boletim_from_query",
    "setup_logger",
    "render_envelope",
]
