"""
``{status, data}`` envelope returned to clients of the boletim service.
"""

from typing import Any

from boletim.errors import BoletimError
from boletim.utils.result import Result

OK = 200
BAD_REQUEST = 400
INTERNAL_SERVER_ERROR = 500


def status_for_error(error: BoletimError) -> int:
    return BAD_REQUEST if error.is_validation_error else INTERNAL_SERVER_ERROR


def _payload(value: Any) -> Any:
    return value.to_dict() if hasattr(value, "to_dict") else value


def render_envelope(result: Result) -> dict:
    """
    Wrap a pipeline result.

    Ok values are serialized with their ``to_dict()``; errors become
    ``{"kind", "message"}`` with status 400 for validation errors and 500
    for anything else.
    """
    if result.is_ok:
        return {"status": OK, "data": _payload(result.value)}

    return {"status": status_for_error(result.error), "data": result.error.to_dict()}
