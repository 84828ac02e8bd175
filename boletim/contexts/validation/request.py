"""
Validation of raw query parameters into a FetchRequest.

Checks run in a fixed order and the first failure wins; nothing is accumulated
and nothing touches the network.
"""

import re
from typing import Mapping, Optional

from omegaconf.dictconfig import DictConfig

from boletim.errors import BoletimError, ErrorKind
from boletim.records import FetchRequest
from boletim.utils.config_helpers import load_portal_config
from boletim.utils.result import Err, Ok, Result

YEAR_PATTERN = re.compile(r"[0-9]{4}")
BIRTH_DATE_PATTERN = re.compile(r"[0-9]{2}/[0-9]{2}/[0-9]{4}")


def _missing(kind: ErrorKind, field_name: str) -> Err[BoletimError]:
    return Err(BoletimError(kind, f"The '{field_name}' field was not supplied"))


def validate_request_parameters(
    query: Mapping[str, Optional[str]],
    config: Optional[DictConfig] = None,
) -> Result[FetchRequest, BoletimError]:
    """
    Turn untyped query parameters into a FetchRequest.

    Args:
        query: Mapping of parameter name to string; absent keys are allowed
        config: Portal configuration providing min_year/max_year (default: load_portal_config())

    Returns:
        Ok(FetchRequest) or Err(BoletimError) naming the first failed check
    """
    config = config if config is not None else load_portal_config()

    student_name = query.get("studentName")
    if not student_name:
        return _missing(ErrorKind.STUDENT_NAME_MISSING, "studentName")

    mother_name = query.get("motherName")
    if not mother_name:
        return _missing(ErrorKind.MOTHER_NAME_MISSING, "motherName")

    year_string = query.get("year")
    if not year_string:
        return _missing(ErrorKind.YEAR_MISSING, "year")

    if not YEAR_PATTERN.fullmatch(year_string):
        return Err(
            BoletimError(
                ErrorKind.YEAR_INVALID_FORMAT,
                "The 'year' field doesn't match the format YYYY",
            )
        )

    year = int(year_string)
    min_year, max_year = int(config.min_year), int(config.max_year)

    if year < min_year or year > max_year:
        return Err(
            BoletimError(
                ErrorKind.YEAR_OUT_OF_RANGE,
                f"The 'year' field is not in the range {min_year} <= n <= {max_year}",
            )
        )

    birth_date = query.get("birthDate")
    if not birth_date:
        return _missing(ErrorKind.BIRTH_DATE_MISSING, "birthDate")

    if not BIRTH_DATE_PATTERN.fullmatch(birth_date):
        return Err(
            BoletimError(
                ErrorKind.BIRTH_DATE_INVALID_FORMAT,
                "The 'birthDate' field doesn't match the format dd/mm/YYYY",
            )
        )

    return Ok(
        FetchRequest(
            student_name=student_name,
            mother_name=mother_name,
            birth_date=birth_date,
            year=year,
        )
    )
