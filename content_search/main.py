"""Main entry point for the content search MCP server."""
import asyncio
import logging
import sys

from content_search.config import get_config
from content_search.server import main


def run() -> None:
    # stdout carries the MCP protocol, so logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=get_config().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(main())


if __name__ == "__main__":
    run()
