"""
File upload to the XcooBee outbox.

Uploading is a three step exchange: find the endpoint for the intent, ask the
API for a signed upload policy per file, then post each file as a multipart
form straight to the storage URL named by its policy.
"""

import logging
from pathlib import Path

from xcoobee_sdk.exceptions import DomainError
from xcoobee_sdk.exceptions import TransportError
from xcoobee_sdk.exceptions import XcooBeeError
from xcoobee_sdk.graphql import GraphQLClient
from xcoobee_sdk.graphql import require

logger = logging.getLogger("xcoobee_sdk.api.files")

OUTBOX = "outbox"
POLICY_FIELDS = (
    "credential",
    "date",
    "identifier",
    "key",
    "policy",
    "signature",
    "upload_url",
)

OUTBOX_ENDPOINTS_QUERY = """
    query getOutboxEndpoints($userCursor: String!) {
      outbox_endpoints(user_cursor: $userCursor) {
        data {
          cursor
          name
          date_c
        }
      }
    }
"""

UPLOAD_POLICY_QUERY = """
    query getUploadPolicy($endpointCursor: String!, $fileName: String!, $intent: String!) {
      upload_policy(endpoint_cursor: $endpointCursor, file_name: $fileName, intent: $intent) {
        credential
        date
        identifier
        key
        policy
        signature
        upload_url
      }
    }
"""


async def outbox_endpoints(
    client: GraphQLClient, api_url_root: str, api_access_token: str, user_cursor: str
) -> list[dict]:
    response = await client.request(
        api_url_root,
        api_access_token,
        OUTBOX_ENDPOINTS_QUERY,
        {"userCursor": user_cursor},
    )
    return (response.get("outbox_endpoints") or {}).get("data") or []


async def upload_policy(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    endpoint_cursor: str,
    file_name: str,
    intent: str = OUTBOX,
) -> dict:
    response = await client.request(
        api_url_root,
        api_access_token,
        UPLOAD_POLICY_QUERY,
        {"endpointCursor": endpoint_cursor, "fileName": file_name, "intent": intent},
    )
    policy = response.get("upload_policy")
    if not policy:
        raise DomainError(f"No upload policy issued for: {file_name}")
    for field in POLICY_FIELDS:
        require(policy, field)
    return policy


async def upload_file(client: GraphQLClient, file, policy: dict):
    """
    Uploads one local file using an S3 POST policy.

    Args:
        file (str | Path): Path of the file to upload.
        policy (dict): Upload policy with `credential`, `date`, `identifier`,
            `key`, `policy`, `signature` and `upload_url`.

    Raises:
        TransportError: If the upload fails or the storage answers with a
            status of 300 or above.
    """
    path = Path(file)
    # See https://docs.aws.amazon.com/AmazonS3/latest/API/sigv4-authentication-HTTPPOST.html
    form = {
        "key": policy["key"],
        "acl": "private",
        "X-Amz-Algorithm": "AWS4-HMAC-SHA256",
        "X-Amz-Credential": policy["credential"],
        "X-Amz-Date": policy["date"],
        "X-Amz-meta-identifier": policy["identifier"],
        "Policy": policy["policy"],
        "X-Amz-Signature": policy["signature"],
    }
    with path.open("rb") as fileobj:
        response = await client.send(
            "POST",
            policy["upload_url"],
            data=form,
            files={"file": (path.name, fileobj)},
        )
    if response.status_code >= 300:
        raise TransportError(
            f"Failed to upload file at: {file}",
            details=response.text,
            status_code=response.status_code,
        )
    return response


async def upload(
    client: GraphQLClient,
    api_url_root: str,
    api_access_token: str,
    user_cursor: str,
    intent: str,
    files,
) -> list[dict]:
    """
    Uploads files one at a time, in the given order.

    A failing file does not stop the others; each gets its own record.

    Returns:
        list[dict]: One `{"file", "success"}` record per file, plus `"error"`
            (a message) for failed files.

    Raises:
        DomainError: If the account has no endpoint for the intent.
    """
    endpoints = await outbox_endpoints(client, api_url_root, api_access_token, user_cursor)
    endpoint = next((e for e in endpoints if e.get("name") == intent), None)
    if endpoint is None:
        raise DomainError(f'No "{intent}" end point found.')
    endpoint_cursor = require(endpoint, "cursor")

    results = []
    for file in files:
        try:
            policy = await upload_policy(
                client,
                api_url_root,
                api_access_token,
                endpoint_cursor,
                Path(file).name,
                intent,
            )
            await upload_file(client, file, policy)
            results.append({"file": str(file), "success": True})
        except (XcooBeeError, OSError) as e:
            logger.warning(f"Failed to upload {file}: {e}")
            results.append({"file": str(file), "success": False, "error": str(e)})
    return results
