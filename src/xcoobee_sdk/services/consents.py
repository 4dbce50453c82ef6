"""
The Consents service: campaigns, consent requests and user-data responses.
"""

import logging
from pathlib import Path
from typing import Optional

from xcoobee_sdk.api import campaigns as campaigns_api
from xcoobee_sdk.api import consents as consents_api
from xcoobee_sdk.api import directives as directives_api
from xcoobee_sdk.api import files as files_api
from xcoobee_sdk.api import users as users_api
from xcoobee_sdk.config import Config
from xcoobee_sdk.exceptions import DomainError
from xcoobee_sdk.graphql import require
from xcoobee_sdk.services.base import Service

logger = logging.getLogger("xcoobee_sdk.services.consents")


class Consents(Service):
    """
    Consent and campaign operations.

    Reached through `XcooBee.consents`:

        sdk = XcooBee(Config(api_key="...", api_secret="...", campaign_id="..."))
        response = await sdk.consents.request_consent("~SomeUser", "ref1")
    """

    async def get_campaign_info(
        self, campaign_id: Optional[str] = None, config: Optional[Config] = None
    ):
        """
        Fetches the basic information of a campaign.

        Args:
            campaign_id (str | None): Defaults to the configured campaign ID.
            config (Config | None): Overrides the default config.

        Returns:
            SuccessResponse | ErrorResponse: `result["campaign"]` holds
                `campaign_name`, `date_c`, `date_e`, `status`, `xcoobee_targets`, ...
        """
        sdk_config = self._resolve(config)
        resolved_campaign_id = self._resolve_campaign_id(campaign_id, config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            campaign = await campaigns_api.get_campaign_info(
                self.client,
                sdk_config.api_url_root,
                api_access_token,
                self._require_campaign_id(resolved_campaign_id),
            )
            if not campaign:
                raise DomainError("Campaign not found.")
            return {"campaign": campaign}

        return await self._call(operation)

    async def get_campaign_id_by_name(
        self, campaign_name: str, config: Optional[Config] = None
    ):
        """Looks up a campaign ID (cursor) by the campaign's unique name."""
        sdk_config = self._resolve(config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            campaign_id = await campaigns_api.get_campaign_id_by_name(
                self.client, sdk_config.api_url_root, api_access_token, campaign_name
            )
            if not campaign_id:
                raise DomainError("Campaign not found.")
            return {"campaign": {"campaign_cursor": campaign_id}}

        return await self._call(operation)

    async def list_campaigns(
        self, after: Optional[str] = None, limit: Optional[int] = None, config: Optional[Config] = None
    ):
        """
        Fetches a page of the account's campaigns.

        Returns:
            PagingResponse | ErrorResponse
        """
        sdk_config = self._resolve(config)

        async def fetch_page(api_config: Config, params: dict):
            api_access_token = await self._token(api_config)
            user = await self._user(api_config)
            return await campaigns_api.get_campaigns(
                self.client,
                api_config.api_url_root,
                api_access_token,
                user["cursor"],
                params["after"],
                params["limit"],
            )

        return await self._page(fetch_page, sdk_config, {"after": after, "limit": limit})

    async def list_consents(
        self,
        statuses=None,
        after: Optional[str] = None,
        limit: Optional[int] = None,
        config: Optional[Config] = None,
    ):
        """
        Fetches a page of consents given to the account's campaigns.

        Args:
            statuses (str | list[str] | None): Only consents in these statuses
                (e.g. "active"). All statuses when None.
        """
        sdk_config = self._resolve(config)

        async def fetch_page(api_config: Config, params: dict):
            api_access_token = await self._token(api_config)
            user = await self._user(api_config)
            return await consents_api.list_consents(
                self.client,
                api_config.api_url_root,
                api_access_token,
                user["cursor"],
                params["statuses"],
                params["after"],
                params["limit"],
            )

        params = {"statuses": statuses, "after": after, "limit": limit}
        return await self._page(fetch_page, sdk_config, params)

    async def get_consent_data(self, consent_id: str, config: Optional[Config] = None):
        sdk_config = self._resolve(config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            consent = await consents_api.get_consent_data(
                self.client, sdk_config.api_url_root, api_access_token, consent_id
            )
            if not consent:
                raise DomainError("Consent not found.")
            return {"consent": consent}

        return await self._call(operation)

    async def get_cookie_consent(
        self,
        xcoobee_id: str,
        campaign_id: Optional[str] = None,
        config: Optional[Config] = None,
    ):
        """
        Fetches a user's website cookie consent for a campaign.

        Returns:
            SuccessResponse | ErrorResponse: `result["cookie_consents"]` maps
                `application_cookie`, `usage_cookie`, `advertising_cookie` and
                `statistics_cookie` to booleans.
        """
        sdk_config = self._resolve(config)
        resolved_campaign_id = self._resolve_campaign_id(campaign_id, config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            user = await self._user(sdk_config)
            cookie_consents = await consents_api.get_cookie_consent(
                self.client,
                sdk_config.api_url_root,
                api_access_token,
                user["cursor"],
                xcoobee_id,
                self._require_campaign_id(resolved_campaign_id),
            )
            return {"cookie_consents": cookie_consents}

        return await self._call(operation)

    async def request_consent(
        self,
        xcoobee_id: str,
        reference_id: Optional[str] = None,
        campaign_id: Optional[str] = None,
        config: Optional[Config] = None,
    ):
        """
        Requests consent from a user.

        Args:
            xcoobee_id (str): XcooBee ID of the user, e.g. "~SomeUser".
            reference_id (str | None): Your reference for this request (max 64
                characters). It comes back in `ConsentApproved` and
                `ConsentDeclined` events.
            campaign_id (str | None): Defaults to the configured campaign ID.

        Returns:
            SuccessResponse | ErrorResponse: `result["ref_id"]`. Success only
                means the request was sent, not that consent was given.
        """
        sdk_config = self._resolve(config)
        resolved_campaign_id = self._resolve_campaign_id(campaign_id, config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            ref_id = await consents_api.request_consent(
                self.client,
                sdk_config.api_url_root,
                api_access_token,
                xcoobee_id,
                self._require_campaign_id(resolved_campaign_id),
                reference_id,
            )
            return {"ref_id": ref_id}

        return await self._call(operation)

    async def confirm_consent_change(self, consent_id: str, config: Optional[Config] = None):
        """Confirms that data was changed as the user requested."""
        sdk_config = self._resolve(config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            confirmed = await consents_api.confirm_consent_change(
                self.client, sdk_config.api_url_root, api_access_token, consent_id
            )
            return {"confirmed": confirmed}

        return await self._call(operation)

    async def confirm_data_delete(self, consent_id: str, config: Optional[Config] = None):
        """Confirms that data was deleted/purged as the user requested."""
        sdk_config = self._resolve(config)

        async def operation():
            api_access_token = await self._token(sdk_config)
            confirmed = await consents_api.confirm_data_delete(
                self.client, sdk_config.api_url_root, api_access_token, consent_id
            )
            return {"confirmed": confirmed}

        return await self._call(operation)

    async def set_user_data_response(
        self,
        message: str,
        consent_id: str,
        request_ref: Optional[str] = None,
        files=None,
        config: Optional[Config] = None,
    ):
        """
        Responds to a user-data request: sends a message to the user's
        communication center and delivers the requested files.

        Files are uploaded one at a time, in order. The delivery directive is
        only submitted when at least one file was uploaded.

        Args:
            message (str): Message to the user.
            consent_id (str): The consent being responded to.
            request_ref (str | None): Your reference for this response.
            files (list[str | Path] | None): Local files with the user's data.

        Returns:
            SuccessResponse | ErrorResponse: `result["progress"]` lists what was
                done, in order; `result["ref_id"]` is the directive reference,
                or None when no file was delivered.
        """
        sdk_config = self._resolve(config)
        files = list(files or [])

        async def operation():
            api_access_token = await self._token(sdk_config)
            progress = []

            await users_api.send_user_message(
                self.client, sdk_config.api_url_root, api_access_token, message, consent_id
            )
            progress.append("successfully sent message")

            ref_id = None
            if files:
                user = await self._user(sdk_config)
                results = await files_api.upload(
                    self.client,
                    sdk_config.api_url_root,
                    api_access_token,
                    user["cursor"],
                    files_api.OUTBOX,
                    files,
                )
                uploaded = []
                for result in results:
                    if result["success"]:
                        progress.append(f"successfully uploaded {result['file']}")
                        uploaded.append(Path(result["file"]).name)
                    else:
                        progress.append(
                            f"failed to upload {result['file']}: {result['error']}"
                        )

                if uploaded:
                    consent = await consents_api.get_consent_data(
                        self.client, sdk_config.api_url_root, api_access_token, consent_id
                    )
                    if not consent:
                        raise DomainError("Consent not found.")
                    directive_input = {
                        "filenames": uploaded,
                        "user_reference": request_ref,
                        "destinations": [
                            {"xcoobee_id": require(consent, "user_xcoobee_id")}
                        ],
                    }
                    ref_id = await directives_api.add_directive(
                        self.client,
                        sdk_config.api_url_root,
                        api_access_token,
                        directive_input,
                    )
                    progress.append(
                        "successfully sent successfully uploaded files to destination"
                    )

            return {"progress": progress, "ref_id": ref_id}

        return await self._call(operation)
