"""
Campaign lookups: details by id, id by name and the paged campaign list.
"""

from xcoobee_sdk.graphql import GraphQLClient
from xcoobee_sdk.graphql import require

CAMPAIGN_INFO_QUERY = """
    query getCampaignInfo($campaignId: String!) {
      campaign(campaign_cursor: $campaignId) {
        campaign_name
        campaign_title {
          locale
          text
        }
        campaign_description {
          locale
          text
        }
        date_c
        date_e
        email_targets {
          email
        }
        endpoint
        status
        targets {
          xcoobee_id
        }
        xcoobee_targets {
          xcoobee_id
        }
      }
    }
"""

CAMPAIGN_ID_BY_NAME_QUERY = """
    query getCampaignIdByName($campaignName: String!) {
      campaign(campaign_name: $campaignName) {
        campaign_cursor
      }
    }
"""

CAMPAIGNS_QUERY = """
    query getCampaigns($userCursor: String!, $after: String, $first: Int) {
      campaigns(user_cursor: $userCursor, after: $after, first: $first) {
        data {
          campaign_cursor
          campaign_name
          status
          date_c
          date_e
        }
        page_info {
          end_cursor
          has_next_page
        }
      }
    }
"""


async def get_campaign_info(
    client: GraphQLClient, api_url_root: str, api_access_token: str, campaign_id: str
):
    """Returns the campaign, or None when the platform knows no such campaign."""
    response = await client.request(
        api_url_root, api_access_token, CAMPAIGN_INFO_QUERY, {"campaignId": campaign_id}
    )
    return response.get("campaign")


async def get_campaign_id_by_name(
    client: GraphQLClient, api_url_root: str, api_access_token: str, campaign_name: str
):
    response = await client.request(
        api_url_root,
        api_access_token,
        CAMPAIGN_ID_BY_NAME_QUERY,
        {"campaignName": campaign_name},
    )
    campaign = response.get("campaign")
    return campaign["campaign_cursor"] if campaign else None


async def get_campaigns(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    user_cursor: str,
    after=None,
    limit=None,
):
    response = await client.request(
        api_url_root,
        api_access_token,
        CAMPAIGNS_QUERY,
        {"userCursor": user_cursor, "after": after, "first": limit},
    )
    return require(response, "campaigns")
