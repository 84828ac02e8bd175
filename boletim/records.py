"""
Records produced and consumed by the boletim pipeline.

All records are frozen. ``to_dict()`` emits the camelCase shape the portal
service has always returned to its clients.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

BIMESTERS = (1, 2, 3, 4)


class FinalResult(str, Enum):
    APV = "APV"
    RPV = "RPV"
    RPF = "RPF"


@dataclass(frozen=True)
class FetchRequest:
    student_name: str
    mother_name: str
    birth_date: str
    year: int

    def to_dict(self) -> dict:
        return {
            "studentName": self.student_name,
            "motherName": self.mother_name,
            "birthDate": self.birth_date,
            "year": self.year,
        }


@dataclass(frozen=True)
class SessionHandle:
    """Redirect target and session id from one form submission. Single use."""

    action_url: str
    session_id: str


@dataclass(frozen=True)
class ReportInformation:
    school: str = ""
    name: str = ""
    course: str = ""
    class_: str = ""
    city: str = ""
    birth_date: str = ""
    grade: str = ""
    shift: str = ""
    state: str = ""
    academic_year: str = ""

    def to_dict(self) -> dict:
        return {
            "school": self.school,
            "name": self.name,
            "course": self.course,
            "class": self.class_,
            "city": self.city,
            "birthDate": self.birth_date,
            "grade": self.grade,
            "shift": self.shift,
            "state": self.state,
            "academicYear": self.academic_year,
        }


def _empty_grades() -> Mapping[int, Optional[float]]:
    return MappingProxyType({bimester: None for bimester in BIMESTERS})


@dataclass(frozen=True)
class GradeRow:
    """One curricular subject row of the grades table."""

    subject: Optional[str] = None
    grades: Mapping[int, Optional[float]] = field(default_factory=_empty_grades)
    annual_grade_average: Optional[float] = None
    absences: Optional[float] = None
    annual_frequence: Optional[float] = None
    final_result: Optional[FinalResult] = None

    # grades is a mapping proxy, so rows compare by value but cannot be hashed
    __hash__ = None

    def __post_init__(self):
        if not isinstance(self.grades, MappingProxyType):
            object.__setattr__(self, "grades", MappingProxyType(dict(self.grades)))

    def to_dict(self) -> dict:
        grades: Dict[str, Optional[float]] = {str(k): v for k, v in self.grades.items()}
        return {
            "subject": self.subject,
            "grades": grades,
            "annualGradeAverage": self.annual_grade_average,
            "absences": self.absences,
            "annualFrequence": self.annual_frequence,
            "finalResult": self.final_result.value if self.final_result else None,
        }


@dataclass(frozen=True)
class Report:
    information: ReportInformation = field(default_factory=ReportInformation)
    grades: Tuple[GradeRow, ...] = ()

    __hash__ = None

    def to_dict(self) -> dict:
        return {
            "information": self.information.to_dict(),
            "grades": [row.to_dict() for row in self.grades],
        }
