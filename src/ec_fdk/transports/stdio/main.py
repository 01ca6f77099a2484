from __future__ import annotations

import asyncio

from mcp.server.fastmcp import FastMCP

from ec_fdk.core.config import fdk_from_env, load_env_config
from ec_fdk.core.logging import setup_logging
from ec_fdk.core.registry import register_discovered_tools


async def main() -> None:
    settings = load_env_config(use_dotenv=True)
    setup_logging(settings.log_level)
    sdk = fdk_from_env(use_dotenv=False)

    app = FastMCP("ec-fdk")
    register_discovered_tools(app, lambda: sdk)

    await app.run_stdio_async()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
