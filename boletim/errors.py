"""
Error taxonomy for the boletim pipeline.

Each failed request yields exactly one BoletimError: a kind plus a
human-readable message.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    STUDENT_NAME_MISSING = "STUDENT_NAME_MISSING"
    MOTHER_NAME_MISSING = "MOTHER_NAME_MISSING"
    YEAR_MISSING = "YEAR_MISSING"
    YEAR_INVALID_FORMAT = "YEAR_INVALID_FORMAT"
    YEAR_OUT_OF_RANGE = "YEAR_OUT_OF_RANGE"
    BIRTH_DATE_MISSING = "BIRTH_DATE_MISSING"
    BIRTH_DATE_INVALID_FORMAT = "BIRTH_DATE_INVALID_FORMAT"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    NO_REDIRECT_URL_FOUND = "NO_REDIRECT_URL_FOUND"
    COOKIE_PARSE_ERROR = "COOKIE_PARSE_ERROR"
    BOLETIM_URL_FETCH_ERROR = "BOLETIM_URL_FETCH_ERROR"
    MALFORMED_TABLE = "MALFORMED_TABLE"
    UNKNOWN = "UNKNOWN"


# Kinds produced before any network call is attempted
VALIDATION_ERROR_KINDS = frozenset(
    {
        ErrorKind.STUDENT_NAME_MISSING,
        ErrorKind.MOTHER_NAME_MISSING,
        ErrorKind.YEAR_MISSING,
        ErrorKind.YEAR_INVALID_FORMAT,
        ErrorKind.YEAR_OUT_OF_RANGE,
        ErrorKind.BIRTH_DATE_MISSING,
        ErrorKind.BIRTH_DATE_INVALID_FORMAT,
    }
)


@dataclass(frozen=True)
class BoletimError:
    """A classified pipeline failure."""

    kind: ErrorKind
    message: str

    @property
    def is_validation_error(self) -> bool:
        return self.kind in VALIDATION_ERROR_KINDS

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
