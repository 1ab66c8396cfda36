"""
Evolution API tool catalog entrypoint.

Builds the tool catalog from environment settings, checks that the
Evolution API is reachable and prints validation and statistics as JSON.

Usage:
    EVOLUTION_URL=https://evo.example.com EVOLUTION_API_KEY=... python -m evolution_tools
"""

import asyncio
import json
import logging
import sys

from evolution_tools.configuration.config import get_settings
from evolution_tools.configuration.container import ToolCatalogContainer
from evolution_tools.domain.exceptions.tool_catalog import ToolCatalogError

logger = logging.getLogger(__name__)


async def main() -> int:
    """Build the catalog and report on it."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting {settings.mcp_server_name} v{settings.mcp_server_version}")

    container = ToolCatalogContainer(settings=settings)
    try:
        container.build_catalog()
        healthy = await container.http_client().health_check()
        if not healthy:
            logger.warning(f"Evolution API at {settings.evolution_url} is not reachable")

        report = container.tool_generator().export_config()
        report["server"] = {
            "name": settings.mcp_server_name,
            "version": settings.mcp_server_version,
            "healthy": healthy,
        }
        print(json.dumps(report, indent=2))
        return 0 if report["validation"]["valid"] else 1
    finally:
        await container.aclose()


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass
    except (ToolCatalogError, ValueError) as e:
        logger.error(f"Failed to build tool catalog: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
