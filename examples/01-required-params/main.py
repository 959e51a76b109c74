"""
Required Params Example

This example shows what credentials each auth scheme of an app needs:
1. List the app catalog
2. Summarise auth scheme fields for one app
3. Look up a single scheme

Run: CONNECTKIT_API_KEY=... python examples/01-required-params/main.py github
"""

import asyncio
import logging
import sys

from connectkit import ConnectKit


async def main(app_key: str) -> None:
    async with ConnectKit() as kit:
        apps = await kit.apps.list()
        print(f"Catalog has {len(apps)} apps")

        summary = await kit.apps.get_required_params(app_key)
        print(f"{app_key} auth schemes: {', '.join(summary.available_auth_schemes) or 'none'}")

        for mode, fields in summary.auth_schemes.items():
            print()
            print(f"[{mode}]")
            print(f"  integration owner must supply: {fields.expected_from_user}")
            print(f"  optional:                      {fields.optional_fields}")
            print(f"  end user supplies at connect:  {fields.required_fields}")

        oauth = await kit.apps.get_required_params_for_auth_scheme(app_key, "OAUTH2")
        if oauth is None:
            print(f"\n{app_key} has no OAUTH2 scheme")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "github"))
