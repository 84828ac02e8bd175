"""
Result page location.

Following the redirect target with the session cookie is what makes the
portal bind the searched student to the session. The report itself is then
always served from the same secondary path, so this step only confirms the
redirect succeeded.
"""

from typing import Optional

import requests
from loguru import logger
from omegaconf.dictconfig import DictConfig

from boletim.errors import BoletimError, ErrorKind
from boletim.records import SessionHandle
from boletim.utils.config_helpers import load_portal_config
from boletim.utils.result import Err, Ok, Result
from boletim.contexts.scraping.requests import (
    HTTP_OK,
    portal_request,
    portal_session,
    portal_url,
    session_cookie_header,
    status_text,
)


def get_boletim_url(
    handle: SessionHandle,
    config: Optional[DictConfig] = None,
    http: Optional[requests.Session] = None,
) -> Result[str, BoletimError]:
    """
    Follow the redirect target and return the result page path.

    Args:
        handle: Session handle from send_form_request()
        config: Portal configuration (default: load_portal_config())
        http: Session to send the request with (default: a new one, closed afterwards)

    Returns:
        Ok(config.result_path), Err(BOLETIM_URL_FETCH_ERROR) on a non-200 answer,
        or Err(UNKNOWN) for transport failures
    """
    config = config if config is not None else load_portal_config()

    with portal_session(config, http) as session:
        response = portal_request(
            session,
            portal_url(config, handle.action_url),
            config,
            headers=session_cookie_header(config, handle.session_id),
        )

    if not response.is_ok:
        return response

    if response.value.status_code != HTTP_OK:
        return Err(
            BoletimError(ErrorKind.BOLETIM_URL_FETCH_ERROR, status_text(response.value))
        )

    logger.debug(f"Redirect target accepted, report served from {config.result_path}")
    return Ok(config.result_path)
