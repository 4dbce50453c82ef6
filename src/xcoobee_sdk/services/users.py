"""
The Users service: the API user record, conversations and consent messages.
"""

from typing import Optional

from xcoobee_sdk.api import users as users_api
from xcoobee_sdk.config import Config
from xcoobee_sdk.services.base import Service


class Users(Service):
    """User and conversation operations, reached through `XcooBee.users`."""

    async def get_user(self, config: Optional[Config] = None):
        """Returns the API user record (`cursor`, `xcoobee_id`, `pgp_public_key`)."""
        sdk_config = self._resolve(config)
        return await self._call(lambda: self._user(sdk_config))

    async def get_conversations(
        self, after: Optional[str] = None, limit: Optional[int] = None, config: Optional[Config] = None
    ):
        sdk_config = self._resolve(config)

        async def fetch_page(api_config: Config, params: dict):
            api_access_token = await self._token(api_config)
            user = await self._user(api_config)
            return await users_api.get_conversations(
                self.client,
                api_config.api_url_root,
                api_access_token,
                user["cursor"],
                params["after"],
                params["limit"],
            )

        return await self._page(fetch_page, sdk_config, {"after": after, "limit": limit})

    async def get_conversation(
        self,
        user_id: str,
        after: Optional[str] = None,
        limit: Optional[int] = None,
        config: Optional[Config] = None,
    ):
        """Fetches a page of the notes exchanged with one user (by user cursor)."""
        sdk_config = self._resolve(config)

        async def fetch_page(api_config: Config, params: dict):
            api_access_token = await self._token(api_config)
            user = await self._user(api_config)
            return await users_api.get_conversation(
                self.client,
                api_config.api_url_root,
                api_access_token,
                user["cursor"],
                params["user_id"],
                params["after"],
                params["limit"],
            )

        params = {"user_id": user_id, "after": after, "limit": limit}
        return await self._page(fetch_page, sdk_config, params)

    async def send_user_message(
        self,
        message: str,
        consent_id: str,
        breach_id: Optional[str] = None,
        config: Optional[Config] = None,
    ):
        """Sends a message to the owner of a consent."""
        sdk_config = self._resolve(config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            note = await users_api.send_user_message(
                self.client,
                sdk_config.api_url_root,
                api_access_token,
                message,
                consent_id,
                breach_id,
            )
            return {"note": note}

        return await self._call(operation)
