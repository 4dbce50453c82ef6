"""
Directives hand files and bee jobs to the XcooBee system.
"""

from xcoobee_sdk.graphql import GraphQLClient
from xcoobee_sdk.graphql import require

ADD_DIRECTIVE_MUTATION = """
    mutation addDirective($directiveInput: DirectiveInput!) {
      add_directive(params: $directiveInput) {
        ref_id
      }
    }
"""


async def add_directive(
    client: GraphQLClient, api_url_root: str, api_access_token: str, directive_input: dict
) -> str:
    """
    Submits a directive (bee processing and/or file delivery).

    Returns:
        str: The reference ID generated by the XcooBee system.
    """
    response = await client.request(
        api_url_root,
        api_access_token,
        ADD_DIRECTIVE_MUTATION,
        {"directiveInput": directive_input},
    )
    return require(response, "add_directive", "ref_id")
