"""
API access tokens from the token-issuing endpoint.
"""

import logging

from xcoobee_sdk.exceptions import TokenError
from xcoobee_sdk.exceptions import TransportError
from xcoobee_sdk.graphql import GraphQLClient

logger = logging.getLogger("xcoobee_sdk.api.tokens")

TOKEN_PATH = "/get_token"
TOKEN_ERROR_MESSAGE = "Unable to get an API access token."


async def get_api_access_token(
    client: GraphQLClient, api_url_root: str, api_key: str, api_secret: str
) -> str:
    """
    Fetches a new API access token from the token-issuing endpoint.

    Raises:
        TokenError: On any failure (bad credentials, transport error, missing
            token in the response).
    """
    url = api_url_root.rstrip("/") + TOKEN_PATH
    try:
        response = await client.send(
            "POST", url, json={"key": api_key, "secret": api_secret}
        )
    except TransportError as exc:
        raise TokenError(TOKEN_ERROR_MESSAGE, details=exc) from exc

    if not response.is_success:
        logger.error(f"Token error: {response.status_code} {response.text}")
        raise TokenError(
            TOKEN_ERROR_MESSAGE,
            details=response.text,
            status_code=response.status_code,
        )

    try:
        data = await response.json()
    except Exception as exc:
        raise TokenError(TOKEN_ERROR_MESSAGE, details=response.text) from exc

    token = data.get("token") if isinstance(data, dict) else None
    if not token:
        raise TokenError(TOKEN_ERROR_MESSAGE, details=data)
    logger.debug("New API access token acquired")
    return token
