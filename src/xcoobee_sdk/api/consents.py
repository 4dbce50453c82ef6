"""
Consent queries and mutations.
"""

from xcoobee_sdk.graphql import GraphQLClient
from xcoobee_sdk.graphql import require

COOKIE_DATA_TYPES = (
    "application_cookie",
    "usage_cookie",
    "advertising_cookie",
    "statistics_cookie",
)

CONSENTS_QUERY = """
    query listConsents($userCursor: String!, $statuses: [ConsentStatus], $after: String, $first: Int) {
      consents(campaign_owner_cursor: $userCursor, statuses: $statuses, after: $after, first: $first) {
        data {
          consent_cursor
          consent_status
          consent_type
          date_c
          date_d
          date_e
          request_owner
          user_xcoobee_id
        }
        page_info {
          end_cursor
          has_next_page
        }
      }
    }
"""

CONSENT_QUERY = """
    query getConsentData($consentId: String!) {
      consent(consent_cursor: $consentId) {
        consent_cursor
        consent_status
        consent_type
        consent_name
        consent_description
        date_c
        date_e
        date_u
        request_data_types
        request_data_sections {
          title
          fields {
            datatype
            value
          }
        }
        user_display_name
        user_xcoobee_id
        user_email_mask
      }
    }
"""

COOKIE_CONSENT_QUERY = """
    query getCookieConsent($userCursor: String!, $campaignId: String!) {
      consents(campaign_owner_cursor: $userCursor, campaign_cursor: $campaignId, statuses: [active]) {
        data {
          request_data_types
          user_xcoobee_id
        }
      }
    }
"""

REQUEST_CONSENT_MUTATION = """
    mutation requestConsent($config: SendConsentRequestConfig!) {
      send_consent_request(config: $config) {
        ref_id
      }
    }
"""

CONFIRM_CONSENT_CHANGE_MUTATION = """
    mutation confirmConsentChange($consentId: String!) {
      confirm_consent_change(consent_cursor: $consentId) {
        confirmed
      }
    }
"""

CONFIRM_DATA_DELETE_MUTATION = """
    mutation confirmDataDelete($consentId: String!) {
      confirm_data_delete(consent_cursor: $consentId) {
        confirmed
      }
    }
"""


async def list_consents(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    user_cursor: str,
    statuses=None,
    after=None,
    limit=None,
):
    if isinstance(statuses, str):
        statuses = [statuses]
    response = await client.request(
        api_url_root,
        api_access_token,
        CONSENTS_QUERY,
        {
            "userCursor": user_cursor,
            "statuses": statuses,
            "after": after,
            "first": limit,
        },
    )
    return require(response, "consents")


async def get_consent_data(
    client: GraphQLClient, api_url_root: str, api_access_token: str, consent_id: str
):
    response = await client.request(
        api_url_root, api_access_token, CONSENT_QUERY, {"consentId": consent_id}
    )
    return response.get("consent")


async def get_cookie_consent(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    user_cursor: str,
    xcoobee_id: str,
    campaign_id: str,
) -> dict[str, bool]:
    """
    Returns which cookie types the user has consented to on the campaign.
    Every cookie type is reported, defaulting to False.
    """
    response = await client.request(
        api_url_root,
        api_access_token,
        COOKIE_CONSENT_QUERY,
        {"userCursor": user_cursor, "campaignId": campaign_id},
    )
    granted = set()
    for consent in (response.get("consents") or {}).get("data") or []:
        if consent.get("user_xcoobee_id") == xcoobee_id:
            granted.update(consent.get("request_data_types") or [])
    return {data_type: data_type in granted for data_type in COOKIE_DATA_TYPES}


async def request_consent(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    xcoobee_id: str,
    campaign_id: str,
    reference=None,
):
    config = {"campaign_cursor": campaign_id, "xcoobee_id": xcoobee_id}
    if reference is not None:
        config["reference"] = reference
    response = await client.request(
        api_url_root, api_access_token, REQUEST_CONSENT_MUTATION, {"config": config}
    )
    return require(response, "send_consent_request", "ref_id")


async def confirm_consent_change(
    client: GraphQLClient, api_url_root: str, api_access_token: str, consent_id: str
) -> bool:
    response = await client.request(
        api_url_root,
        api_access_token,
        CONFIRM_CONSENT_CHANGE_MUTATION,
        {"consentId": consent_id},
    )
    return bool(require(response, "confirm_consent_change").get("confirmed"))


async def confirm_data_delete(
    client: GraphQLClient, api_url_root: str, api_access_token: str, consent_id: str
) -> bool:
    response = await client.request(
        api_url_root,
        api_access_token,
        CONFIRM_DATA_DELETE_MUTATION,
        {"consentId": consent_id},
    )
    return bool(require(response, "confirm_data_delete").get("confirmed"))
