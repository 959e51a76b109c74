"""
Connect Account Example

This example connects an end user to an app:
1. Initiate a connection (creating an integration on the fly)
2. Send the user to the redirect URL
3. Wait for the connected account to become active

Run: CONNECTKIT_API_KEY=... python examples/02-connect-account/main.py
"""

import asyncio
import logging
import os

from connectkit import ConnectKit, SDKError, SDKTimeoutError


async def main() -> None:
    async with ConnectKit() as kit:
        try:
            request = await kit.connected_accounts.initiate(
                {
                    "appName": "github",
                    "authMode": "OAUTH2",
                    "authConfig": {
                        "client_id": os.getenv("GITHUB_CLIENT_ID", ""),
                        "client_secret": os.getenv("GITHUB_CLIENT_SECRET", ""),
                    },
                    "entityId": "user-42",
                    "redirectUri": "https://example.com/connected",
                }
            )
        except SDKError as e:
            print(f"Could not initiate connection: {e}")
            return

        print(f"Status: {request.connection_status}")
        if request.redirect_url:
            print(f"Authorize at: {request.redirect_url}")

        try:
            account = await request.wait_until_active(timeout=120)
        except SDKTimeoutError:
            print("User did not finish authorizing in time")
            return

        print(f"Connected account {account.id} is {account.status}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
