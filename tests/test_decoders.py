from collections.abc import Hashable

import pytest
from bs4 import BeautifulSoup

from boletim.contexts.scraping.decoders import (
    parse_curricular_data_table,
    parse_data_table,
)
from boletim.errors import ErrorKind
from boletim.records import FinalResult, GradeRow, Report, ReportInformation


def _table(body: str):
    return BeautifulSoup(f'<table class="table"><tbody>{body}</tbody></table>', "html.parser").table


def _row(*cells):
    return "<tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>"


# --- identity table ---

def test_data_table_sets_school():
    result = parse_data_table(_table("<tr><th>Escola:</th><td>Colégio X</td></tr>"))
    assert result.value.school == "Colégio X"


def test_data_table_unknown_label_is_ignored():
    result = parse_data_table(_table("<tr><th>Matrícula:</th><td>123</td></tr>"))
    assert result.value == ReportInformation()


def test_data_table_strips_numbered_suffix_and_whitespace():
    result = parse_data_table(_table("<tr><th> Turma - 12: </th><td>  M2MR01 </td></tr>"))
    assert result.value.class_ == "M2MR01"


def test_data_table_several_pairs_per_row():
    body = (
        "<tr>"
        "<th><strong>Escola:</strong></th><td>Colégio X</td>"
        "<th>Ano Letivo:</th><td>2023</td>"
        "</tr>"
        "<tr><th>Estado:</th>\n<!-- uf -->\n<td>PA</td></tr>"
    )
    info = parse_data_table(_table(body)).value
    assert (info.school, info.academic_year, info.state) == ("Colégio X", "2023", "PA")


def test_data_table_blank_value_is_empty_string():
    result = parse_data_table(_table("<tr><th>Cidade:</th><td>   </td></tr>"))
    assert result.value.city == ""


def test_data_table_header_after_header_is_malformed():
    result = parse_data_table(_table("<tr><th>Escola:</th><th>Curso:</th><td>x</td></tr>"))
    assert result.error.kind == ErrorKind.MALFORMED_TABLE
    assert result.error.message == "Malformed table data"


def test_data_table_value_without_header_is_malformed():
    result = parse_data_table(_table("<tr><td>orphan</td></tr>"))
    assert result.error.kind == ErrorKind.MALFORMED_TABLE


def test_data_table_pending_flag_resets_per_row():
    body = "<tr><th>Escola:</th></tr><tr><th>Curso:</th><td>Médio</td></tr>"
    info = parse_data_table(_table(body)).value
    assert info.school == ""
    assert info.course == "Médio"


def test_data_table_empty_body():
    assert parse_data_table(_table("")).value == ReportInformation()


# --- grades table ---

def test_grades_row_decoding():
    table = _table(_row("Matemática", "7,5", "8,0", "6,5", "9,0", "7,75", "2", "95", "APV"))

    rows = parse_curricular_data_table(table).value

    assert rows == [
        GradeRow(
            subject="Matemática",
            grades={1: 7.5, 2: 8.0, 3: 6.5, 4: 9.0},
            annual_grade_average=7.75,
            absences=2,
            annual_frequence=95,
            final_result=FinalResult.APV,
        )
    ]


def test_grades_section_title_row_is_skipped():
    table = _table("<tr><th>Componentes Curriculares</th></tr>")
    assert parse_curricular_data_table(table).value == []


def test_grades_caption_in_later_cell_skips_whole_row():
    table = _table(_row("Disciplina", "1ª Av", "2ª Av"))
    assert parse_curricular_data_table(table).value == []


def test_grades_footer_rows_are_skipped():
    body = _row("Resultado Final Matrícula Regular: ", "APROVADO") + _row("Frequência Anual(%):", "91,7")
    assert parse_curricular_data_table(_table(body)).value == []


def test_grades_dash_means_no_value():
    table = _table(_row("Física", "6,0", "-", "-", "-", "6,0", "0", "100", "-"))

    row = parse_curricular_data_table(table).value[0]

    assert row.grades == {1: 6.0, 2: None, 3: None, 4: None}
    assert row.final_result is None


def test_grades_short_row_keeps_missing_slots_empty():
    row = parse_curricular_data_table(_table(_row("Artes", "8,5"))).value[0]

    assert row.subject == "Artes"
    assert row.grades[1] == 8.5
    assert row.grades[2] is None
    assert row.annual_grade_average is None
    assert row.final_result is None


def test_grades_extra_cells_are_ignored():
    table = _table(_row("Química", "5", "5", "5", "5", "5", "1", "99", "RPV", "obs"))
    row = parse_curricular_data_table(table).value[0]
    assert row.final_result == FinalResult.RPV


def test_grades_row_order_is_preserved():
    body = "".join(_row(subject, "1") for subject in ["História", "Geografia", "Biologia"])
    rows = parse_curricular_data_table(_table(body)).value
    assert [row.subject for row in rows] == ["História", "Geografia", "Biologia"]


def test_grades_row_without_cells_is_dropped():
    assert parse_curricular_data_table(_table("<tr>\n</tr>")).value == []


def test_grades_empty_body():
    assert parse_curricular_data_table(_table("")).value == []


def test_rows_without_explicit_tbody():
    table = BeautifulSoup(
        "<table>" + _row("Inglês", "7") + "</table>", "html.parser"
    ).table
    rows = parse_curricular_data_table(table).value
    assert rows[0].subject == "Inglês"


def test_grade_rows_compare_by_value_but_are_unhashable():
    row = GradeRow(subject="Artes", grades={1: 8.5})

    assert row == GradeRow(subject="Artes", grades={1: 8.5})
    assert not isinstance(row, Hashable)
    assert not isinstance(Report(grades=(row,)), Hashable)
    with pytest.raises(TypeError):
        row.grades[2] = 7.0
