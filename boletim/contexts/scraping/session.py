"""
Session acquisition: submit the search form and read back where the portal
redirects to, plus the PHP session id bound to that search.

The portal answers the POST with an HTML page whose script sets
``window.location = '<target>';``. The target is only valid together with the
PHPSESSID cookie issued in the same response.
"""

import re
from typing import Dict, Optional

import requests
from loguru import logger
from omegaconf.dictconfig import DictConfig

from boletim.errors import BoletimError, ErrorKind
from boletim.records import FetchRequest, SessionHandle
from boletim.utils.config_helpers import load_portal_config
from boletim.utils.result import Err, Ok, Result
from boletim.utils.text_processing import slice_from_last_occurrence
from boletim.contexts.scraping.requests import (
    FORM_CONTENT_TYPE,
    portal_request,
    portal_session,
)

# Literal the portal prints when the name/mother/birth date triple matches nobody
STUDENT_NOT_FOUND_MARKER = "O aluno informado"

REDIRECT_MARKER = "window.location"
REDIRECT_STATEMENT_END = "';"
REDIRECT_PATTERN = re.compile(r"window\.location = '(.*?)';")

# requests folds repeated Set-Cookie headers into one, joined by ", "
COOKIE_SEPARATOR = re.compile(r",\s*(?=[^;,=\s]+=)")

# Search mode and submit action of the boletim form
BOLETIM_TYPE = "1"
SUBMIT_ACTION = "Pesquisar"


def build_form_data(request: FetchRequest) -> Dict[str, str]:
    return {
        "txtAnoLetivo": str(request.year),
        "txtDataNascimento": request.birth_date,
        "txtNomeAluno": request.student_name.lower(),
        "txtNomeMae": request.mother_name.lower(),
        "rdTipoBoletim": BOLETIM_TYPE,
        "btnVisualiza": SUBMIT_ACTION,
    }


def parse_cookies(cookie_string: str) -> Result[Dict[str, str], BoletimError]:
    """
    Parse a ``Set-Cookie`` header into key/value pairs.

    Folded headers are first split into their cookies. Segments are split on
    ``;`` and then on the first ``=``; keys and values are trimmed. Attributes
    such as ``path`` end up as ordinary keys.

    Returns:
        Ok(dict) or Err(COOKIE_PARSE_ERROR) for an empty header or a segment without ``=``
    """
    if not cookie_string or not cookie_string.strip():
        return Err(BoletimError(ErrorKind.COOKIE_PARSE_ERROR, "No cookie header in response"))

    cookies = {}
    parts = [
        part for cookie in COOKIE_SEPARATOR.split(cookie_string) for part in cookie.split(";")
    ]
    for part in parts:
        if not part.strip():
            continue
        key, sep, value = part.partition("=")
        if not sep:
            return Err(
                BoletimError(
                    ErrorKind.COOKIE_PARSE_ERROR,
                    f"Malformed cookie segment: '{part.strip()}'",
                )
            )
        cookies[key.strip()] = value.strip()

    return Ok(cookies)


def extract_redirect_url(body: str) -> Result[str, BoletimError]:
    """
    Find the target of the last ``window.location = '...';`` in the page.

    A page naming an unknown student, and a page with no redirect at all, are
    both reported as USER_NOT_FOUND; the portal does not distinguish them.
    """
    if STUDENT_NOT_FOUND_MARKER in body:
        return Err(BoletimError(ErrorKind.USER_NOT_FOUND, "The user doesn't exist"))

    statement = slice_from_last_occurrence(body, REDIRECT_MARKER, REDIRECT_STATEMENT_END)
    if statement is None:
        return Err(BoletimError(ErrorKind.USER_NOT_FOUND, "The user doesn't exist"))

    match = REDIRECT_PATTERN.search(statement)
    if not match or not match.group(1):
        return Err(BoletimError(ErrorKind.NO_REDIRECT_URL_FOUND, "No redirection URL found."))

    return Ok(match.group(1))


def _session_handle(
    response: requests.Response, config: DictConfig
) -> Result[SessionHandle, BoletimError]:
    redirect = extract_redirect_url(response.text)
    if not redirect.is_ok:
        return redirect

    cookies = parse_cookies(response.headers.get("Set-Cookie", ""))
    if not cookies.is_ok:
        return cookies

    session_id = cookies.value.get(config.session_cookie)
    if not session_id:
        return Err(
            BoletimError(
                ErrorKind.COOKIE_PARSE_ERROR,
                f"Cookie '{config.session_cookie}' not found in response",
            )
        )

    return Ok(SessionHandle(action_url=redirect.value, session_id=session_id))


def send_form_request(
    request: FetchRequest,
    config: Optional[DictConfig] = None,
    http: Optional[requests.Session] = None,
) -> Result[SessionHandle, BoletimError]:
    """
    Submit the boletim search form and open a portal session.

    Args:
        request: Validated fetch request
        config: Portal configuration (default: load_portal_config())
        http: Session to send the request with (default: a new one, closed afterwards)

    Returns:
        Ok(SessionHandle) or Err with USER_NOT_FOUND, NO_REDIRECT_URL_FOUND,
        COOKIE_PARSE_ERROR, or UNKNOWN for transport failures
    """
    config = config if config is not None else load_portal_config()

    logger.debug(f"Submitting boletim form for year {request.year}")

    with portal_session(config, http) as session:
        response = portal_request(
            session,
            config.base_url,
            config,
            method="POST",
            headers={"Content-Type": FORM_CONTENT_TYPE},
            data=build_form_data(request),
        )

    return response.and_then(lambda r: _session_handle(r, config))
