"""
Tests for the command-line interface, run against the fake API.
"""

import json

import pytest
from click.testing import CliRunner

from tests.fakes import API_KEY
from tests.fakes import API_SECRET
from tests.fakes import API_URL_ROOT
from tests.fakes import FakeXcooBeeAPI
from tests.fakes import page
from xcoobee_sdk import cli as cli_module
from xcoobee_sdk.client import XcooBee


@pytest.fixture
def api(monkeypatch):
    monkeypatch.setenv("XCOOBEE_API_KEY", API_KEY)
    monkeypatch.setenv("XCOOBEE_API_SECRET", API_SECRET)
    monkeypatch.setenv("XCOOBEE_API_URL_ROOT", API_URL_ROOT)
    monkeypatch.setenv("XCOOBEE_CAMPAIGN_ID", "campaign-cursor")

    fake = FakeXcooBeeAPI()
    monkeypatch.setattr(
        cli_module, "XcooBee", lambda **kwargs: XcooBee(transport=fake.transport, **kwargs)
    )
    return fake


def test_request_consent_prints_result(api):
    api.operations["requestConsent"] = {"send_consent_request": {"ref_id": "ref-1"}}

    result = CliRunner().invoke(cli_module.cli, ["request-consent", "--xcoobee-id", "~someone"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"code": 200, "result": {"ref_id": "ref-1"}}


def test_error_response_exits_with_status_1(api):
    api.operations["getCampaignInfo"] = {"campaign": None}

    result = CliRunner().invoke(cli_module.cli, ["campaign-info"])

    assert result.exit_code == 1
    assert json.loads(result.stdout)["error"]["message"] == "Campaign not found."


def test_list_bees_all_pages(api):
    pages = {
        None: page([{"bee_system_name": "a"}], end_cursor="p1", has_next_page=True),
        "p1": page([{"bee_system_name": "b"}]),
    }
    api.operations["listBees"] = lambda variables: {"bees": pages[variables["after"]]}

    result = CliRunner().invoke(cli_module.cli, ["list-bees", "--all"])

    assert result.exit_code == 0
    assert result.stdout.count('"bee_system_name"') == 2


def test_get_token(api):
    result = CliRunner().invoke(cli_module.cli, ["get-token"])

    assert result.exit_code == 0
    assert result.stdout.count(".") == 2  # header.payload.signature
    assert api.tokens_issued == 1
