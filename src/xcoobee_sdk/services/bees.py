"""
The Bees service: search bees, upload files and start bee processing.
"""

import json
import re
from typing import Optional

from xcoobee_sdk.api import bees as bees_api
from xcoobee_sdk.api import directives as directives_api
from xcoobee_sdk.api import files as files_api
from xcoobee_sdk.config import Config
from xcoobee_sdk.exceptions import InvalidArgumentError
from xcoobee_sdk.services.base import Service

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Files are delivered by the directive itself, not by a bee.
TRANSFER_BEE = "transfer"


def appears_to_be_an_email_address(value: str) -> bool:
    return bool(EMAIL_RE.match(value))


def build_directive_input(bees: dict, options: dict, subscriptions=None) -> dict:
    """
    Builds the directive submitted by `Bees.take_off`.

    Args:
        bees (dict): Bee names mapped to bee parameters.
        options (dict): `{"process": {"fileNames": [...], "destinations": [...],
            "userReference": ...}}`
        subscriptions: Optional transaction subscriptions, passed through.
    """
    process = options.get("process") or {}
    directive_input = {
        "filenames": process.get("fileNames") or [],
        "user_reference": process.get("userReference"),
    }
    if subscriptions:
        directive_input["subscriptions"] = subscriptions

    destinations = process.get("destinations") or []
    if destinations:
        directive_input["destinations"] = [
            {"email": destination}
            if appears_to_be_an_email_address(destination)
            else {"xcoobee_id": destination}
            for destination in destinations
        ]

    directive_input["bees"] = [
        {"bee_name": bee_name, "params": json.dumps(bee_params)}
        for bee_name, bee_params in bees.items()
        if bee_name != TRANSFER_BEE
    ]
    return directive_input


class Bees(Service):
    """
    Bee operations, reached through `XcooBee.bees`.

    Example:
        response = await sdk.bees.list_bees("social")
        async for page in response.iter_pages():
            for bee in page.result["data"]:
                print(bee["bee_system_name"])
    """

    async def list_bees(
        self,
        search_text: Optional[str] = None,
        after: Optional[str] = None,
        limit: Optional[int] = None,
        config: Optional[Config] = None,
    ):
        """
        Returns a page of the bees the account can hire whose system name or
        label matches the search text.

        Returns:
            PagingResponse | ErrorResponse
        """
        sdk_config = self._resolve(config)

        async def fetch_page(api_config: Config, params: dict):
            api_access_token = await self._token(api_config)
            return await bees_api.list_bees(
                self.client,
                api_config.api_url_root,
                api_access_token,
                params["search_text"],
                params["after"],
                params["limit"],
            )

        params = {"search_text": search_text, "after": after, "limit": limit}
        return await self._page(fetch_page, sdk_config, params)

    async def take_off(
        self,
        bees: dict,
        options: dict,
        subscriptions=None,
        config: Optional[Config] = None,
    ):
        """
        Starts processing previously uploaded files with the given bees.

        Args:
            bees (dict): Bee names mapped to bee parameters. A "transfer" bee
                is ignored.
            options (dict): See `build_directive_input`.
            subscriptions: Optional transaction subscriptions.

        Returns:
            SuccessResponse | ErrorResponse: `result["ref_id"]`.
        """
        sdk_config = self._resolve(config)
        directive_input = build_directive_input(bees, options, subscriptions)

        async def operation():
            api_access_token = await self._token(sdk_config)
            ref_id = await directives_api.add_directive(
                self.client, sdk_config.api_url_root, api_access_token, directive_input
            )
            return {"ref_id": ref_id}

        return await self._call(operation)

    async def upload_files(
        self, files, intent: Optional[str] = None, config: Optional[Config] = None
    ):
        """
        Uploads local files to the account's outbox.

        Returns:
            SuccessResponse | ErrorResponse: `result` holds one
                `{"file", "success", "error"?}` record per file, in order.

        Raises:
            InvalidArgumentError: If `intent` is neither None nor "outbox".
        """
        end_point_name = intent or files_api.OUTBOX
        if end_point_name != files_api.OUTBOX:
            raise InvalidArgumentError(
                f'The "intent" argument must be one of: None or "{files_api.OUTBOX}".'
            )
        sdk_config = self._resolve(config)
        files = list(files)

        async def operation():
            api_access_token = await self._token(sdk_config)
            user = await self._user(sdk_config)
            return await files_api.upload(
                self.client,
                sdk_config.api_url_root,
                api_access_token,
                user["cursor"],
                end_point_name,
                files,
            )

        return await self._call(operation)
