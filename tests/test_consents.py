"""
Tests for the Consents service: campaigns, consents and user-data responses.
"""

import pytest

from tests.fakes import FakeXcooBeeAPI
from tests.fakes import GraphQLFailure
from tests.fakes import make_sdk
from tests.fakes import page
from tests.fakes import upload_operations
from xcoobee_sdk.config import Config
from xcoobee_sdk.paging import PagingResponse
from xcoobee_sdk.responses import ErrorResponse
from xcoobee_sdk.responses import SuccessResponse

CONSENT = {
    "consent_cursor": "consent-1",
    "user_xcoobee_id": "~data_owner",
    "consent_status": "active",
}


@pytest.mark.asyncio
async def test_invalid_credentials_return_error_response():
    """
    GIVEN: a config whose API secret the token endpoint rejects
    WHEN: we request consent
    THEN: an ErrorResponse with code 400 and the token error message comes back
    """
    api = FakeXcooBeeAPI()
    sdk = make_sdk(api, api_secret="wrong-secret")

    response = await sdk.consents.request_consent("~someone", "ref")

    assert isinstance(response, ErrorResponse)
    assert response.code == 400
    assert response.error.message == "Unable to get an API access token."
    assert api.calls == []


@pytest.mark.asyncio
async def test_request_consent_returns_ref_id():
    api = FakeXcooBeeAPI(
        {
            "requestConsent": lambda variables: {
                "send_consent_request": {"ref_id": f"ref-for-{variables['config']['reference']}"}
            }
        }
    )
    sdk = make_sdk(api)

    response = await sdk.consents.request_consent("~someone", "order-42")

    assert isinstance(response, SuccessResponse)
    assert response.result == {"ref_id": "ref-for-order-42"}
    _, variables = api.calls[-1]
    assert variables["config"] == {
        "campaign_cursor": "campaign-cursor",
        "xcoobee_id": "~someone",
        "reference": "order-42",
    }


@pytest.mark.asyncio
async def test_request_consent_uses_overriding_config():
    api = FakeXcooBeeAPI({"requestConsent": {"send_consent_request": {"ref_id": "r"}}})
    sdk = make_sdk(api)

    await sdk.consents.request_consent("~someone", config=Config(campaign_id="other-campaign"))

    _, variables = api.calls[-1]
    assert variables["config"]["campaign_cursor"] == "other-campaign"


@pytest.mark.asyncio
async def test_request_consent_without_campaign_id_is_an_error_response():
    api = FakeXcooBeeAPI()
    sdk = make_sdk(api, campaign_id=None)

    response = await sdk.consents.request_consent("~someone")

    assert isinstance(response, ErrorResponse)
    assert response.error.message == "Campaign ID could not be resolved."


@pytest.mark.asyncio
async def test_graphql_error_message_is_kept_verbatim():
    def fail(variables):
        raise GraphQLFailure("Campaign is not active.")

    api = FakeXcooBeeAPI({"requestConsent": fail})
    sdk = make_sdk(api)

    response = await sdk.consents.request_consent("~someone")

    assert isinstance(response, ErrorResponse)
    assert response.error.message == "Campaign is not active."


@pytest.mark.asyncio
async def test_get_campaign_info_not_found():
    api = FakeXcooBeeAPI({"getCampaignInfo": {"campaign": None}})
    sdk = make_sdk(api)

    response = await sdk.consents.get_campaign_info()

    assert isinstance(response, ErrorResponse)
    assert response.error.message == "Campaign not found."


@pytest.mark.asyncio
async def test_get_campaign_info_returns_campaign():
    campaign = {"campaign_name": "welcome", "status": "active"}
    api = FakeXcooBeeAPI({"getCampaignInfo": {"campaign": campaign}})
    sdk = make_sdk(api)

    response = await sdk.consents.get_campaign_info("explicit-campaign")

    assert response.result == {"campaign": campaign}
    assert api.calls[-1] == ("getCampaignInfo", {"campaignId": "explicit-campaign"})


@pytest.mark.asyncio
async def test_get_campaign_id_by_name():
    api = FakeXcooBeeAPI({"getCampaignIdByName": {"campaign": {"campaign_cursor": "c-9"}}})
    sdk = make_sdk(api)

    response = await sdk.consents.get_campaign_id_by_name("welcome")

    assert response.result == {"campaign": {"campaign_cursor": "c-9"}}


@pytest.mark.asyncio
async def test_list_campaigns_pages_with_user_cursor():
    pages = {
        None: page([{"campaign_name": "a"}], end_cursor="p1", has_next_page=True),
        "p1": page([{"campaign_name": "b"}]),
    }
    api = FakeXcooBeeAPI({"getCampaigns": lambda v: {"campaigns": pages[v["after"]]}})
    sdk = make_sdk(api)

    first = await sdk.consents.list_campaigns(limit=1)
    second = await first.get_next_page()

    assert isinstance(first, PagingResponse)
    assert second.result["data"] == [{"campaign_name": "b"}]
    assert await second.get_next_page() is None
    assert [v for name, v in api.calls if name == "getCampaigns"] == [
        {"userCursor": "user-cursor", "after": None, "first": 1},
        {"userCursor": "user-cursor", "after": "p1", "first": 1},
    ]


@pytest.mark.asyncio
async def test_list_consents_accepts_single_status():
    api = FakeXcooBeeAPI({"listConsents": {"consents": page([CONSENT])}})
    sdk = make_sdk(api)

    response = await sdk.consents.list_consents("active")

    assert response.result["data"] == [CONSENT]
    assert api.calls[-1][1]["statuses"] == ["active"]


@pytest.mark.asyncio
async def test_get_cookie_consent_reports_every_cookie_type():
    api = FakeXcooBeeAPI(
        {
            "getCookieConsent": {
                "consents": {
                    "data": [
                        {"user_xcoobee_id": "~visitor", "request_data_types": ["usage_cookie"]},
                        {"user_xcoobee_id": "~other", "request_data_types": ["advertising_cookie"]},
                    ]
                }
            }
        }
    )
    sdk = make_sdk(api)

    response = await sdk.consents.get_cookie_consent("~visitor")

    assert response.result == {
        "cookie_consents": {
            "application_cookie": False,
            "usage_cookie": True,
            "advertising_cookie": False,
            "statistics_cookie": False,
        }
    }


@pytest.mark.asyncio
async def test_confirm_consent_change_and_data_delete():
    api = FakeXcooBeeAPI(
        {
            "confirmConsentChange": {"confirm_consent_change": {"confirmed": True}},
            "confirmDataDelete": {"confirm_data_delete": {"confirmed": True}},
        }
    )
    sdk = make_sdk(api)

    changed = await sdk.consents.confirm_consent_change("consent-1")
    deleted = await sdk.consents.confirm_data_delete("consent-1")

    assert changed.result == {"confirmed": True}
    assert deleted.result == {"confirmed": True}


def data_response_api():
    operations = {
        "sendMessage": {"send_message": {"note_text": "Here is your data"}},
        "getConsentData": {"consent": CONSENT},
        "addDirective": {"add_directive": {"ref_id": "directive-ref"}},
    }
    operations.update(upload_operations())
    return FakeXcooBeeAPI(operations)


@pytest.mark.asyncio
async def test_set_user_data_response_without_files_only_sends_message():
    """
    GIVEN: no files to deliver
    WHEN: we respond to a user-data request
    THEN: only the message is sent and no directive is submitted
    """
    api = data_response_api()
    sdk = make_sdk(api)

    response = await sdk.consents.set_user_data_response("Here is your data", "consent-1")

    assert response.result == {"progress": ["successfully sent message"], "ref_id": None}
    assert "addDirective" not in api.operation_names()


@pytest.mark.asyncio
async def test_set_user_data_response_with_file(tmp_path):
    """
    GIVEN: one local file
    WHEN: we respond to a user-data request
    THEN: the message is sent, the file uploaded and delivered to the consent owner
    """
    data_file = tmp_path / "data.txt"
    data_file.write_text("user data")
    api = data_response_api()
    sdk = make_sdk(api)

    response = await sdk.consents.set_user_data_response(
        "Here is your data", "consent-1", "req-1", [data_file]
    )

    assert response.result["progress"] == [
        "successfully sent message",
        f"successfully uploaded {data_file}",
        "successfully sent successfully uploaded files to destination",
    ]
    assert response.result["ref_id"] == "directive-ref"
    _, variables = api.calls[-1]
    assert variables["directiveInput"] == {
        "filenames": ["data.txt"],
        "user_reference": "req-1",
        "destinations": [{"xcoobee_id": "~data_owner"}],
    }
    assert len(api.uploads) == 1


@pytest.mark.asyncio
async def test_set_user_data_response_reports_failed_upload(tmp_path):
    missing = tmp_path / "missing.txt"
    api = data_response_api()
    sdk = make_sdk(api)

    response = await sdk.consents.set_user_data_response("msg", "consent-1", files=[missing])

    progress = response.result["progress"]
    assert progress[0] == "successfully sent message"
    assert progress[1].startswith(f"failed to upload {missing}: ")
    assert len(progress) == 2
    assert "addDirective" not in api.operation_names()


@pytest.mark.asyncio
async def test_token_is_shared_between_calls():
    api = FakeXcooBeeAPI({"requestConsent": {"send_consent_request": {"ref_id": "r"}}})
    sdk = make_sdk(api)

    await sdk.consents.request_consent("~a")
    await sdk.consents.request_consent("~b")

    assert api.tokens_issued == 1
    assert len(sdk.token_cache) == 1


@pytest.mark.asyncio
async def test_request_consent_with_null_result_is_an_error_response():
    """
    GIVEN: the API answers the consent request with a null result
    WHEN: we request consent
    THEN: an ErrorResponse comes back instead of an exception
    """
    api = FakeXcooBeeAPI({"requestConsent": {"send_consent_request": None}})
    sdk = make_sdk(api)

    response = await sdk.consents.request_consent("~X", "ref1", "C1")

    assert isinstance(response, ErrorResponse)
    assert response.code == 400
    assert response.error.message == "No send_consent_request in the response."


@pytest.mark.asyncio
async def test_confirm_consent_change_with_empty_result_is_an_error_response():
    api = FakeXcooBeeAPI({"confirmConsentChange": {}})
    sdk = make_sdk(api)

    response = await sdk.consents.confirm_consent_change("consent-1")

    assert isinstance(response, ErrorResponse)
    assert response.error.message == (
        "Malformed GraphQL response: missing confirm_consent_change."
    )
