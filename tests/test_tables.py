import requests
from bs4 import BeautifulSoup

from boletim.contexts.scraping.tables import get_boletim, is_data_table, parse_boletim_html
from boletim.errors import ErrorKind
from boletim.records import FinalResult, Report, ReportInformation

from conftest import BASE_URL, make_http, make_response


def test_parse_boletim_page(boletim_html):
    report = parse_boletim_html(boletim_html).value

    assert report.information == ReportInformation(
        school="EEEM COLÉGIO X",
        name="MARIA DA SILVA",
        course="ENSINO MÉDIO",
        class_="M2MR01",
        city="BELÉM",
        birth_date="01/02/2008",
        grade="2ª SÉRIE",
        shift="MANHÃ",
        state="PA",
        academic_year="2023",
    )
    assert [row.subject for row in report.grades] == ["Matemática", "Língua Portuguesa", "Física"]

    math, portuguese, physics = report.grades
    assert math.grades == {1: 7.5, 2: 8.0, 3: 6.5, 4: 9.0}
    assert math.final_result == FinalResult.APV
    assert portuguese.grades[3] is None
    assert portuguese.annual_frequence == 88.5
    assert portuguese.final_result is None
    assert physics.absences == 30
    assert physics.final_result == FinalResult.RPF


def test_page_without_result_tables_is_empty_report():
    assert parse_boletim_html("<html><body><p>Nada</p></body></html>").value == Report()


def test_identity_table_recognised_by_strong_label(boletim_html):
    tables = BeautifulSoup(boletim_html, "html.parser").select("table.table")
    assert [is_data_table(table) for table in tables] == [True, False]


def test_plain_escola_header_is_not_identity_table():
    html = '<table class="table"><tbody><tr><th>Escola:</th><td>X</td></tr></tbody></table>'
    report = parse_boletim_html(html).value

    # Without <strong> the table is read as grades
    assert report.information == ReportInformation()
    assert report.grades[0].subject == "Escola:"


def test_malformed_identity_table_fails_whole_page():
    html = (
        '<table class="table"><tbody>'
        "<tr><th><strong>Escola:</strong></th><th>Curso:</th></tr>"
        "</tbody></table>"
    )
    assert parse_boletim_html(html).error.kind == ErrorKind.MALFORMED_TABLE


def test_get_boletim_sends_session_cookie(portal_config, boletim_html):
    http = make_http(make_response(text=boletim_html))

    result = get_boletim("visualizaBoletim.php", "abc123", portal_config, http=http)

    assert len(result.value.grades) == 3
    args, kwargs = http.request.call_args
    assert args == ("GET", BASE_URL + "visualizaBoletim.php")
    assert kwargs["headers"] == {"Cookie": "PHPSESSID=abc123"}


def test_get_boletim_non_200_is_unknown(portal_config):
    http = make_http(make_response(status=500, reason="Internal Server Error"))

    result = get_boletim("visualizaBoletim.php", "abc123", portal_config, http=http)

    assert result.error.kind == ErrorKind.UNKNOWN
    assert result.error.message == "Internal Server Error"


def test_get_boletim_transport_failure(portal_config):
    http = make_http(requests.ConnectionError("reset by peer"))

    result = get_boletim("visualizaBoletim.php", "abc123", portal_config, http=http)

    assert result.error.kind == ErrorKind.UNKNOWN


def _served_response(body: bytes, content_type: str) -> requests.Response:
    # Mirrors HTTPAdapter.build_response: encoding comes only from the headers
    response = requests.Response()
    response.status_code = 200
    response.reason = "OK"
    response.headers["Content-Type"] = content_type
    response.encoding = requests.utils.get_encoding_from_headers(response.headers)
    response._content = body
    return response


def test_get_boletim_reads_page_charset_over_header_default(portal_config, boletim_html):
    response = _served_response(boletim_html.encode("utf-8"), "text/html")
    assert response.encoding == "ISO-8859-1"

    report = get_boletim("visualizaBoletim.php", "abc123", portal_config, http=make_http(response)).value

    assert report.information.grade == "2ª SÉRIE"
    assert report.information.city == "BELÉM"
    assert [row.subject for row in report.grades] == ["Matemática", "Língua Portuguesa", "Física"]


def test_get_boletim_honours_declared_charset(portal_config):
    html = '<table class="table"><tbody><tr><td>Física</td><td>7,5</td></tr></tbody></table>'
    response = _served_response(html.encode("iso-8859-1"), "text/html; charset=ISO-8859-1")

    report = get_boletim("visualizaBoletim.php", "abc123", portal_config, http=make_http(response)).value

    assert report.grades[0].subject == "Física"
    assert report.grades[0].grades[1] == 7.5
