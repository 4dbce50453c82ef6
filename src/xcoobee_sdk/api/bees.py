"""
Bee catalogue queries.
"""

from xcoobee_sdk.graphql import GraphQLClient
from xcoobee_sdk.graphql import require

BEES_QUERY = """
    query listBees($searchText: String, $after: String, $first: Int) {
      bees(search: $searchText, after: $after, first: $first) {
        data {
          bee_system_name
          bee_icon
          label
          description
          input_extensions
          output_extensions
          is_file_upload_needed
          cost {
            type
            value
          }
        }
        page_info {
          end_cursor
          has_next_page
        }
      }
    }
"""


async def list_bees(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    search_text=None,
    after=None,
    limit=None,
):
    response = await client.request(
        api_url_root,
        api_access_token,
        BEES_QUERY,
        {"searchText": search_text, "after": after, "first": limit},
    )
    return require(response, "bees")
