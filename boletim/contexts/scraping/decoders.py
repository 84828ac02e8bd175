"""
Decoders for the two kinds of result tables on the boletim page.

- parse_data_table: identity table ("Escola:", "Aluno(a):", ...), read as
  alternating header/value cells.
- parse_curricular_data_table: grades table, read positionally with a
  nine-slot schema. Decorative header and footer rows share the same body
  as the data rows and are filtered out by their literal text.
"""

from types import MappingProxyType
from typing import Iterator, List, Optional

from bs4.element import Tag
from loguru import logger

from boletim.errors import BoletimError, ErrorKind
from boletim.records import BIMESTERS, FinalResult, GradeRow, ReportInformation
from boletim.utils.result import Err, Ok, Result
from boletim.utils.text_processing import normalize_header_label, parse_decimal

LABEL_TO_FIELD = MappingProxyType(
    {
        "Escola": "school",
        "Aluno(a)": "name",
        "Data de Nascimento": "birth_date",
        "Curso": "course",
        "Série": "grade",
        "Turma": "class_",
        "Turno": "shift",
        "Cidade": "city",
        "Estado": "state",
        "Ano Letivo": "academic_year",
    }
)

SUBJECT = "subject"
GRADE = "grade"
ANNUAL_GRADE_AVERAGE = "annual_grade_average"
ABSENCES = "absences"
ANNUAL_FREQUENCE = "annual_frequence"
FINAL_RESULT = "final_result"

# Column index -> slot; indices 1..4 are bimesters 1..4
GRADE_ROW_SCHEMA = (
    SUBJECT,
    GRADE,
    GRADE,
    GRADE,
    GRADE,
    ANNUAL_GRADE_AVERAGE,
    ABSENCES,
    ANNUAL_FREQUENCE,
    FINAL_RESULT,
)
FIRST_GRADE_COLUMN = GRADE_ROW_SCHEMA.index(GRADE)

# Raw cell texts that only appear on title/caption rows of the grades table
SKIP_ROW_LITERALS = frozenset(
    {
        "Componentes Curriculares",
        "1ª Av",
        "Resultado Final Matrícula Regular: ",
        "Frequência Anual(%):",
    }
)

NO_RESULT = "-"

_FINAL_RESULTS = MappingProxyType({result.value: result for result in FinalResult})


def body_rows(table: Tag) -> List[Tag]:
    """
    Rows of the table body, in document order.

    Rows inside explicit ``<tbody>`` elements are used when present; otherwise
    the ``<tr>`` children of the table itself, which is where a browser would
    have inserted the implicit body.
    """
    bodies = table.find_all("tbody", recursive=False)
    if bodies:
        return [row for body in bodies for row in body.find_all("tr", recursive=False)]
    return table.find_all("tr", recursive=False)


def element_children(row: Tag) -> Iterator[Tag]:
    """Element children only; text and comment nodes are skipped."""
    for child in row.children:
        if isinstance(child, Tag):
            yield child


def _malformed() -> Err[BoletimError]:
    return Err(BoletimError(ErrorKind.MALFORMED_TABLE, "Malformed table data"))


def parse_data_table(table: Tag) -> Result[ReportInformation, BoletimError]:
    """
    Decode the identity table into ReportInformation.

    Every header cell must be followed by a value cell before the next header.
    Unknown labels are tolerated: their value cell is consumed and dropped.
    """
    fields = {}

    for row in body_rows(table):
        expecting_value = False
        key: Optional[str] = None

        for cell in element_children(row):
            if cell.name == "th":
                if expecting_value:
                    return _malformed()
                expecting_value = True
                key = LABEL_TO_FIELD.get(normalize_header_label(cell.get_text()))

            elif cell.name == "td":
                if not expecting_value:
                    return _malformed()
                expecting_value = False
                if key:
                    fields[key] = cell.get_text().strip()
                key = None

    return Ok(ReportInformation(**fields))


def _final_result(text: str) -> Optional[FinalResult]:
    if not text or text == NO_RESULT:
        return None
    result = _FINAL_RESULTS.get(text)
    if result is None:
        logger.warning(f"Unknown final result '{text}' in grades table")
    return result


def _decode_grade_row(row: Tag) -> Optional[GradeRow]:
    """Decode one row, or None for caption rows and rows without cells."""
    values = {}
    grades = {bimester: None for bimester in BIMESTERS}
    column = 0

    for cell in element_children(row):
        content = cell.get_text()

        if content in SKIP_ROW_LITERALS:
            return None

        if column >= len(GRADE_ROW_SCHEMA):
            # Extra trailing cells do not fit the schema
            continue

        slot = GRADE_ROW_SCHEMA[column]
        if slot == GRADE:
            grades[column - FIRST_GRADE_COLUMN + 1] = parse_decimal(content)
        elif slot == SUBJECT:
            values[SUBJECT] = content.strip()
        elif slot == FINAL_RESULT:
            values[FINAL_RESULT] = _final_result(content.strip())
        else:
            values[slot] = parse_decimal(content)

        column += 1

    if column == 0:
        return None

    return GradeRow(grades=grades, **values)


def parse_curricular_data_table(table: Tag) -> Result[List[GradeRow], BoletimError]:
    """
    Decode the grades table into GradeRows, preserving row order.

    Short rows (fewer cells than the schema) still produce a GradeRow with the
    missing slots left as None.
    """
    grade_rows = []

    for row in body_rows(table):
        grade_row = _decode_grade_row(row)
        if grade_row is not None:
            grade_rows.append(grade_row)

    return Ok(grade_rows)
