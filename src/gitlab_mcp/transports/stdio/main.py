from __future__ import annotations

import asyncio

from mcp.server.fastmcp import FastMCP

from gitlab_mcp.core.context import (
    apply_request_context,
    client_from_context,
    reset_context,
    seed_from_env,
)
from gitlab_mcp.core.logging import setup_logging
from gitlab_mcp.core.registry import register_discovered_tools


async def main() -> None:
    setup_logging()
    # Single tenant: fails fast with AuthenticationError when no token is set.
    ctx = seed_from_env(use_dotenv=True)
    tokens = apply_request_context(
        ctx.credentials, request_id=ctx.request_id, user_agent=ctx.user_agent
    )

    app = FastMCP("gitlab-mcp")
    register_discovered_tools(app, client_from_context)

    try:
        await app.run_stdio_async()
    finally:
        reset_context(tokens)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
