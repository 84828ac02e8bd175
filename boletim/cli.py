"""
Command-line interface for the boletim scraper.

Uses typer with one subcommand per service operation. Output is the
``{status, data}`` JSON envelope on stdout.
"""

import json
from pathlib import Path
from typing import List, Optional

import typer

from boletim.contexts.scraping import (
    fetch_boletim_from_query,
    render_envelope,
    setup_logger,
)
from boletim.contexts.scraping.orchestration import LOGS_PATH
from boletim.contexts.validation import validate_request_parameters
from boletim.utils.config_helpers import load_portal_config

app = typer.Typer(
    add_completion=False,
    help="Fetch student boletins from the SEDUC-PA portal",
)


def _query(student_name, mother_name, year, birth_date) -> dict:
    return {
        "studentName": student_name,
        "motherName": mother_name,
        "year": year,
        "birthDate": birth_date,
    }


def _emit(envelope: dict) -> None:
    typer.echo(json.dumps(envelope, ensure_ascii=False, indent=2))
    if envelope["status"] != 200:
        raise typer.Exit(code=1)


@app.command("fetch")
def fetch_command(
    student_name: Optional[str] = typer.Option(None, "--student-name", "-s", help="Student full name"),
    mother_name: Optional[str] = typer.Option(None, "--mother-name", "-m", help="Mother full name"),
    year: Optional[str] = typer.Option(None, "--year", "-y", help="Academic year (YYYY)"),
    birth_date: Optional[str] = typer.Option(None, "--birth-date", "-b", help="Birth date (dd/mm/YYYY)"),
    config: Optional[List[Path]] = typer.Option(
        None,
        "--config",
        "-c",
        help="Extra YAML config file(s) merged over config/portal.yaml",
    ),
    log_dir: Path = typer.Option(LOGS_PATH, "--log-dir", help="Directory for log files"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log to file"),
):
    """
    Fetch a boletim and print it as JSON.

    Examples:

        $ boletim fetch -s "Maria da Silva" -m "Ana da Silva" -y 2023 -b 01/02/2008
    """
    setup_logger(log_dir, verbose=not quiet)
    portal_config = load_portal_config(config or None)

    result = fetch_boletim_from_query(
        _query(student_name, mother_name, year, birth_date), portal_config
    )
    _emit(render_envelope(result))


@app.command("validate")
def validate_command(
    student_name: Optional[str] = typer.Option(None, "--student-name", "-s"),
    mother_name: Optional[str] = typer.Option(None, "--mother-name", "-m"),
    year: Optional[str] = typer.Option(None, "--year", "-y"),
    birth_date: Optional[str] = typer.Option(None, "--birth-date", "-b"),
    config: Optional[List[Path]] = typer.Option(
        None,
        "--config",
        "-c",
        help="Extra YAML config file(s) merged over config/portal.yaml",
    ),
):
    """Check the parameters without contacting the portal."""
    result = validate_request_parameters(
        _query(student_name, mother_name, year, birth_date),
        load_portal_config(config or None),
    )
    _emit(render_envelope(result))


if __name__ == "__main__":
    app()
