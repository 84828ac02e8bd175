import os
from unittest.mock import Mock

import pytest
import requests
from omegaconf import OmegaConf

from boletim.utils.config_helpers import DEFAULT_PORTAL_CONFIG

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")

BASE_URL = DEFAULT_PORTAL_CONFIG["base_url"]


def load_fixture(filename: str) -> str:
    with open(os.path.join(FIXTURES_DIR, filename), "r", encoding="utf-8") as f:
        return f.read()


def make_response(status: int = 200, text: str = "", headers=None, reason: str = "OK") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    return response


def make_http(*outcomes) -> Mock:
    """Session mock answering successive requests with the given responses or exceptions."""
    http = Mock(spec=requests.Session)
    http.request.side_effect = list(outcomes)
    return http


@pytest.fixture
def portal_config():
    return OmegaConf.create(DEFAULT_PORTAL_CONFIG)


@pytest.fixture
def valid_query():
    return {
        "studentName": "Maria da Silva",
        "motherName": "Ana da Silva",
        "year": "2023",
        "birthDate": "01/02/2008",
    }


@pytest.fixture
def boletim_html():
    return load_fixture("boletim.html")


@pytest.fixture
def form_found_response():
    return make_response(
        text=load_fixture("form_found.html"),
        headers={"Set-Cookie": "PHPSESSID=abc123; path=/"},
    )
