"""
Example usage of the XcooBee SDK.

Requests consent from a user, then walks every consent given to the
account's campaigns. Credentials are read from XCOOBEE_* environment
variables or a .env file.
"""

import asyncio
import logging
import sys

from xcoobee_sdk import ErrorResponse
from xcoobee_sdk import XcooBee
from xcoobee_sdk import XcooBeeSettings
from xcoobee_sdk.logging_middleware import LoggingMiddleware

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main(xcoobee_id: str):
    settings = XcooBeeSettings()
    async with XcooBee(settings=settings, middlewares=[LoggingMiddleware()]) as sdk:
        ping = await sdk.system.ping()
        if isinstance(ping, ErrorResponse):
            logger.error(f"Configuration check failed: {ping.error.message}")
            return

        response = await sdk.consents.request_consent(xcoobee_id, reference_id="example-1")
        if isinstance(response, ErrorResponse):
            logger.error(f"Consent request failed: {response.error.message}")
        else:
            logger.info(f"Consent requested, ref_id={response.result['ref_id']}")

        consents = await sdk.consents.list_consents("active", limit=20)
        if isinstance(consents, ErrorResponse):
            logger.error(f"Listing consents failed: {consents.error.message}")
            return
        async for page in consents.iter_pages():
            for consent in page.result["data"]:
                logger.info(f"{consent['consent_cursor']}: {consent['user_xcoobee_id']}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "~SomeUser"))
