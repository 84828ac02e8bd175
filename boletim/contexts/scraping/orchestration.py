"""
Boletim pipeline orchestration with logging.

Provides functionality to:
- Run the three portal steps in order, stopping at the first failure
- Validate raw query parameters and fetch in one call
- Log each run to timestamped files (CLI use)

No step is retried; a transient portal failure surfaces immediately.
"""

import os
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Mapping, Optional

import requests
from dotenv import load_dotenv
from loguru import logger
from omegaconf.dictconfig import DictConfig

from boletim.errors import BoletimError
from boletim.records import FetchRequest, Report
from boletim.utils.config_helpers import load_portal_config
from boletim.utils.result import Result
from boletim.contexts.validation import validate_request_parameters
from boletim.contexts.scraping.tables import get_boletim
from boletim.contexts.scraping.requests import portal_session
from boletim.contexts.scraping.session import send_form_request
from boletim.contexts.scraping.locator import get_boletim_url

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def setup_logger(log_dir: Path = LOGS_PATH, verbose: bool = True) -> Path:
    """
    Configure loguru to write to timestamped log file.

    Args:
        log_dir: Directory for log files (default: LOGS_PATH from environment)
        verbose: Also echo INFO and above to stderr

    Returns:
        Path to the created log file
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"boletim_{timestamp}.txt"

    logger.remove()  # Remove default stderr handler
    logger.add(log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}", level="DEBUG")
    if verbose:
        logger.add(
            lambda msg: print(msg, end="", file=sys.stderr),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}\n",
            level="INFO",
        )

    return log_file


def fetch_boletim(
    request: FetchRequest,
    config: Optional[DictConfig] = None,
    http: Optional[requests.Session] = None,
) -> Result[Report, BoletimError]:
    """
    Run form submission, redirect check and table extraction for one request.

    Args:
        request: Validated fetch request
        config: Portal configuration (default: load_portal_config())
        http: Session for all three calls (default: a new one, closed afterwards)

    Returns:
        Ok(Report) with the complete boletim, or the first step's Err unchanged
    """
    config = config if config is not None else load_portal_config()
    start_time = time.time()

    logger.info(f"Fetching boletim for year {request.year}")

    with portal_session(config, http) as session:
        handle_result = send_form_request(request, config, http=session)
        result = handle_result.and_then(
            lambda handle: get_boletim_url(handle, config, http=session).and_then(
                lambda boletim_url: get_boletim(
                    boletim_url, handle.session_id, config, http=session
                )
            )
        )

    elapsed = time.time() - start_time
    if result.is_ok:
        logger.info(
            f"Boletim fetched: {len(result.value.grades)} subjects ({elapsed:.1f}s)"
        )
    else:
        logger.warning(f"Boletim fetch failed: {result.error} ({elapsed:.1f}s)")

    return result


def fetch_boletim_from_query(
    query: Mapping[str, Optional[str]],
    config: Optional[DictConfig] = None,
    http: Optional[requests.Session] = None,
) -> Result[Report, BoletimError]:
    """
    Validate raw query parameters, then fetch the boletim.

    Validation failures return before any network call.
    """
    config = config if config is not None else load_portal_config()

    return validate_request_parameters(query, config).and_then(
        lambda request: fetch_boletim(request, config, http=http)
    )
