"""
Result page fetching and table dispatch.

The boletim page carries several ``table.table`` elements. The identity table
is recognised by its first header reading "Escola:"; every other result table
is decoded as a grades table.
"""

from dataclasses import replace
from typing import Optional, Union

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag
from loguru import logger
from omegaconf.dictconfig import DictConfig

from boletim.errors import BoletimError, ErrorKind
from boletim.records import Report
from boletim.utils.config_helpers import load_portal_config
from boletim.utils.result import Err, Ok, Result
from boletim.contexts.scraping.decoders import (
    body_rows,
    element_children,
    parse_curricular_data_table,
    parse_data_table,
)
from boletim.contexts.scraping.requests import (
    HTTP_OK,
    portal_request,
    portal_session,
    portal_url,
    session_cookie_header,
    status_text,
)

RESULT_TABLE_SELECTOR = "table.table"
DATA_TABLE_LABEL = "Escola:"


def first_header_emphasis(table: Tag) -> Optional[str]:
    """Text of the first ``<strong>`` directly inside a body-row ``<th>``."""
    for row in body_rows(table):
        for cell in element_children(row):
            if cell.name != "th":
                continue
            strong = cell.find("strong", recursive=False)
            if strong is not None:
                return strong.get_text()
    return None


def is_data_table(table: Tag) -> bool:
    return first_header_emphasis(table) == DATA_TABLE_LABEL


def declared_charset(response: requests.Response) -> Optional[str]:
    """Charset named in the Content-Type header, if any."""
    if "charset" not in response.headers.get("Content-Type", "").lower():
        return None
    return requests.utils.get_encoding_from_headers(response.headers)


def parse_boletim_html(
    html: Union[str, bytes], encoding: Optional[str] = None
) -> Result[Report, BoletimError]:
    """
    Decode every result table of the page into a Report.

    Raw bytes are decoded by BeautifulSoup, which honours ``encoding`` when
    given and the page's own ``<meta charset>`` otherwise.

    If the page repeats a table kind, the last one wins. A page without result
    tables yields an empty Report.
    """
    if isinstance(html, bytes):
        soup = BeautifulSoup(html, "html.parser", from_encoding=encoding)
    else:
        soup = BeautifulSoup(html, "html.parser")

    report = Report()

    for table in soup.select(RESULT_TABLE_SELECTOR):
        if is_data_table(table):
            decoded = parse_data_table(table)
            if not decoded.is_ok:
                return decoded
            report = replace(report, information=decoded.value)
        else:
            decoded = parse_curricular_data_table(table)
            if not decoded.is_ok:
                return decoded
            report = replace(report, grades=tuple(decoded.value))

    logger.debug(f"Decoded boletim with {len(report.grades)} subject rows")
    return Ok(report)


def get_boletim(
    boletim_url: str,
    session_id: str,
    config: Optional[DictConfig] = None,
    http: Optional[requests.Session] = None,
) -> Result[Report, BoletimError]:
    """
    Fetch the result page with the session cookie and decode its tables.

    Args:
        boletim_url: Result page path relative to the portal base URL
        session_id: PHPSESSID from send_form_request()
        config: Portal configuration (default: load_portal_config())
        http: Session to send the request with (default: a new one, closed afterwards)

    Returns:
        Ok(Report), Err(UNKNOWN) for non-200 answers and transport failures,
        or Err(MALFORMED_TABLE) from the identity table decoder
    """
    config = config if config is not None else load_portal_config()

    with portal_session(config, http) as session:
        response = portal_request(
            session,
            portal_url(config, boletim_url),
            config,
            headers=session_cookie_header(config, session_id),
        )

    if not response.is_ok:
        return response

    if response.value.status_code != HTTP_OK:
        return Err(BoletimError(ErrorKind.UNKNOWN, status_text(response.value)))

    return parse_boletim_html(response.value.content, declared_charset(response.value))
