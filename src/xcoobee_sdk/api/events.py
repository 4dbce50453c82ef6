"""
Events delivered to the API user and the campaign event subscriptions.
"""

from xcoobee_sdk.graphql import GraphQLClient
from xcoobee_sdk.graphql import require

EVENTS_QUERY = """
    query getEvents($userCursor: String!, $after: String, $first: Int) {
      events(user_cursor: $userCursor, after: $after, first: $first) {
        data {
          event_id
          event_type
          payload
          reference_cursor
          reference_type
          owner_cursor
          date_c
        }
        page_info {
          end_cursor
          has_next_page
        }
      }
    }
"""

EVENT_SUBSCRIPTIONS_QUERY = """
    query listEventSubscriptions($campaignId: String!, $after: String, $first: Int) {
      event_subscriptions(campaign_cursor: $campaignId, after: $after, first: $first) {
        data {
          campaign_cursor
          event_type
          handler
          date_c
        }
        page_info {
          end_cursor
          has_next_page
        }
      }
    }
"""

ADD_EVENT_SUBSCRIPTION_MUTATION = """
    mutation addEventSubscription($config: AddSubscriptionsConfig!) {
      add_event_subscriptions(config: $config) {
        data {
          campaign_cursor
          event_type
          handler
          date_c
        }
        page_info {
          end_cursor
          has_next_page
        }
      }
    }
"""

DELETE_EVENT_SUBSCRIPTION_MUTATION = """
    mutation deleteEventSubscription($config: DeleteSubscriptionsConfig!) {
      delete_event_subscriptions(config: $config) {
        deleted_number
      }
    }
"""


def _event_type(name: str) -> str:
    # "ConsentApproved" -> "consent_approved"
    chars = []
    for index, char in enumerate(name):
        if char.isupper() and index:
            chars.append("_")
        chars.append(char.lower())
    return "".join(chars)


async def get_events(
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
        EVENTS_QUERY,
        {"userCursor": user_cursor, "after": after, "first": limit},
    )
    return require(response, "events")


async def list_event_subscriptions(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    campaign_id: str,
    after=None,
    limit=None,
):
    response = await client.request(
        api_url_root,
        api_access_token,
        EVENT_SUBSCRIPTIONS_QUERY,
        {"campaignId": campaign_id, "after": after, "first": limit},
    )
    return require(response, "event_subscriptions")


async def add_event_subscription(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    events: dict[str, str],
    campaign_id: str,
):
    """
    Args:
        events (dict): Maps web hook names (e.g. "ConsentApproved") to handler names.
    """
    config = {
        "campaign_cursor": campaign_id,
        "events": [
            {"event_type": _event_type(name), "handler": handler}
            for name, handler in events.items()
        ],
    }
    response = await client.request(
        api_url_root, api_access_token, ADD_EVENT_SUBSCRIPTION_MUTATION, {"config": config}
    )
    return require(response, "add_event_subscriptions")


async def delete_event_subscription(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    events,
    campaign_id: str,
):
    """
    Args:
        events: Web hook names, as any iterable (a dict's keys are used).
    """
    config = {
        "campaign_cursor": campaign_id,
        "events": [_event_type(name) for name in events],
    }
    response = await client.request(
        api_url_root,
        api_access_token,
        DELETE_EVENT_SUBSCRIPTION_MUTATION,
        {"config": config},
    )
    return require(response, "delete_event_subscriptions")
