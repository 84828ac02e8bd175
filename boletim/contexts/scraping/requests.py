"""HTTP helpers shared by the portal steps."""

from contextlib import contextmanager
from typing import Iterator, Optional

import requests
from loguru import logger
from omegaconf.dictconfig import DictConfig

from boletim.errors import BoletimError, ErrorKind
from boletim.utils.result import Err, Ok, Result

HTTP_OK = 200

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def new_portal_session(config: DictConfig) -> requests.Session:
    """Create a fresh HTTP session. One per boletim request, never shared."""
    session = requests.Session()
    session.headers.update({"User-Agent": config.user_agent})
    return session


@contextmanager
def portal_session(
    config: DictConfig, http: Optional[requests.Session] = None
) -> Iterator[requests.Session]:
    """
    Yield the given session, or a new one that is closed on exit.

    Sessions passed in by the caller are left open; the caller owns them.
    """
    if http is not None:
        yield http
        return

    session = new_portal_session(config)
    try:
        yield session
    finally:
        session.close()


def session_cookie_header(config: DictConfig, session_id: str) -> dict:
    return {"Cookie": f"{config.session_cookie}={session_id}"}


def portal_url(config: DictConfig, path: str) -> str:
    return config.base_url + path


def portal_request(
    http: requests.Session,
    url: str,
    config: DictConfig,
    method: str = "GET",
    **kwargs,
) -> Result[requests.Response, BoletimError]:
    """
    Make a single HTTP request to the portal. No retries.

    Args:
        http: Session used to send the request
        url: Absolute URL
        config: Portal configuration (provides the timeout)
        method: 'GET' or 'POST'
        **kwargs: Passed through to requests (headers, data, ...)

    Returns:
        Ok(response) for any HTTP response, whatever its status code,
        or Err(UNKNOWN) carrying the transport error message
    """
    kwargs.setdefault("timeout", config.timeout)

    try:
        response = http.request(method, url, **kwargs)
    except requests.RequestException as e:
        logger.warning(f"{method} {url} failed: {e}")
        return Err(BoletimError(ErrorKind.UNKNOWN, str(e)))

    logger.debug(f"{method} {url} -> {response.status_code}")
    return Ok(response)


def status_text(response: requests.Response) -> str:
    """Reason phrase of the response, falling back to the numeric code."""
    return response.reason or str(response.status_code)
