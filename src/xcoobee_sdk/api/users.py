"""
The API user record, conversations and consent messages.
"""

from xcoobee_sdk.graphql import GraphQLClient
from xcoobee_sdk.graphql import require

USER_QUERY = """
    query getUser {
      user {
        cursor
        xcoobee_id
        pgp_public_key
      }
    }
"""

CONVERSATIONS_QUERY = """
    query getConversations($userCursor: String!, $after: String, $first: Int) {
      conversations(user_cursor: $userCursor, after: $after, first: $first) {
        data {
          display_name
          consent_cursor
          target_cursor
          date_c
        }
        page_info {
          end_cursor
          has_next_page
        }
      }
    }
"""

CONVERSATION_QUERY = """
    query getConversation($userCursor: String!, $targetCursor: String!, $after: String, $first: Int) {
      conversation(user_cursor: $userCursor, target_cursor: $targetCursor, after: $after, first: $first) {
        data {
          display_name
          consent_cursor
          note_text
          date_c
          user_cursor
        }
        page_info {
          end_cursor
          has_next_page
        }
      }
    }
"""

SEND_MESSAGE_MUTATION = """
    mutation sendMessage($message: String!, $consentCursor: String!, $breachCursor: String) {
      send_message(message: $message, consent_cursor: $consentCursor, breach_cursor: $breachCursor, note_type: consent) {
        note_text
      }
    }
"""


async def get_user(client: GraphQLClient, api_url_root: str, api_access_token: str):
    response = await client.request(api_url_root, api_access_token, USER_QUERY)
    return response.get("user")


async def get_conversations(
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
        CONVERSATIONS_QUERY,
        {"userCursor": user_cursor, "after": after, "first": limit},
    )
    return require(response, "conversations")


async def get_conversation(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    user_cursor: str,
    target_cursor: str,
    after=None,
    limit=None,
):
    response = await client.request(
        api_url_root,
        api_access_token,
        CONVERSATION_QUERY,
        {
            "userCursor": user_cursor,
            "targetCursor": target_cursor,
            "after": after,
            "first": limit,
        },
    )
    return require(response, "conversation")


async def send_user_message(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    message: str,
    consent_id: str,
    breach_id=None,
):
    response = await client.request(
        api_url_root,
        api_access_token,
        SEND_MESSAGE_MUTATION,
        {"message": message, "consentCursor": consent_id, "breachCursor": breach_id},
    )
    return require(response, "send_message")
