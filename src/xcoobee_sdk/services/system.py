"""
The System service: connectivity checks, events and event subscriptions.
"""

from typing import Optional

from xcoobee_sdk import pgp
from xcoobee_sdk.api import campaigns as campaigns_api
from xcoobee_sdk.api import events as events_api
from xcoobee_sdk.config import Config
from xcoobee_sdk.exceptions import DomainError
from xcoobee_sdk.services.base import Service


class System(Service):
    """System operations, reached through `XcooBee.system`."""

    async def ping(self, config: Optional[Config] = None):
        """
        Checks that the configuration connects to the XcooBee system.

        The API user must have a public PGP key on its profile, and the
        configuration must name an existing campaign.

        Returns:
            SuccessResponse | ErrorResponse: `result["ponged"]` is True.
        """
        sdk_config = self._resolve(config)
        resolved_campaign_id = self._resolve_campaign_id(None, config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            user = await self._user(sdk_config)
            if not user.get("pgp_public_key"):
                raise DomainError("PGP key not found.")
            campaign = None
            if resolved_campaign_id:
                campaign = await campaigns_api.get_campaign_info(
                    self.client,
                    sdk_config.api_url_root,
                    api_access_token,
                    resolved_campaign_id,
                )
            if not campaign:
                raise DomainError("Campaign not found.")
            return {"ponged": True}

        return await self._call(operation)

    async def get_events(
        self, after: Optional[str] = None, limit: Optional[int] = None, config: Optional[Config] = None
    ):
        """
        Fetches a page of the account's events.

        When the config carries a `pgp_secret`, each event payload is decrypted
        with it (and `pgp_password`) and parsed as JSON; otherwise payloads are
        returned as delivered. A payload that cannot be decrypted fails the page.

        Returns:
            PagingResponse | ErrorResponse
        """
        sdk_config = self._resolve(config)

        async def fetch_page(api_config: Config, params: dict):
            api_access_token = await self._token(api_config)
            user = await self._user(api_config)
            events_page = await events_api.get_events(
                self.client,
                api_config.api_url_root,
                api_access_token,
                user["cursor"],
                params["after"],
                params["limit"],
            )
            if api_config.pgp_secret:
                events_page = {
                    **events_page,
                    "data": pgp.decrypt_events(
                        events_page.get("data") or [],
                        api_config.pgp_secret,
                        api_config.pgp_password,
                    ),
                }
            return events_page

        return await self._page(fetch_page, sdk_config, {"after": after, "limit": limit})

    async def list_event_subscriptions(
        self,
        campaign_id: Optional[str] = None,
        after: Optional[str] = None,
        limit: Optional[int] = None,
        config: Optional[Config] = None,
    ):
        """
        Fetches a page of the event subscriptions of a campaign.

        Returns:
            PagingResponse | ErrorResponse
        """
        sdk_config = self._resolve(config)
        resolved_campaign_id = self._resolve_campaign_id(campaign_id, config)

        async def fetch_page(api_config: Config, params: dict):
            api_access_token = await self._token(api_config)
            return await events_api.list_event_subscriptions(
                self.client,
                api_config.api_url_root,
                api_access_token,
                self._require_campaign_id(params["campaign_id"]),
                params["after"],
                params["limit"],
            )

        params = {"campaign_id": resolved_campaign_id, "after": after, "limit": limit}
        return await self._page(fetch_page, sdk_config, params)

    async def add_event_subscription(
        self,
        events: dict,
        campaign_id: Optional[str] = None,
        config: Optional[Config] = None,
    ):
        """
        Subscribes handlers to web hooks.

        Args:
            events (dict): Web hook names mapped to handler names, e.g.
                `{"ConsentApproved": "onConsentApproved"}`.

        Returns:
            SuccessResponse | ErrorResponse: `result` is a page of the added
                subscriptions (`data`, `page_info`).
        """
        sdk_config = self._resolve(config)
        resolved_campaign_id = self._resolve_campaign_id(campaign_id, config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            return await events_api.add_event_subscription(
                self.client,
                sdk_config.api_url_root,
                api_access_token,
                events,
                self._require_campaign_id(resolved_campaign_id),
            )

        return await self._call(operation)

    async def delete_event_subscription(
        self,
        events,
        campaign_id: Optional[str] = None,
        config: Optional[Config] = None,
    ):
        """
        Deletes event subscriptions from a campaign.

        Returns:
            SuccessResponse | ErrorResponse: `result["deleted_number"]`.
        """
        sdk_config = self._resolve(config)
        resolved_campaign_id = self._resolve_campaign_id(campaign_id, config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            return await events_api.delete_event_subscription(
                self.client,
                sdk_config.api_url_root,
                api_access_token,
                events,
                self._require_campaign_id(resolved_campaign_id),
            )

        return await self._call(operation)
