"""Health check script for the inventory engine's variant store."""
import sys
import asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from inventory_engine.config import settings


async def check_database_connection() -> bool:
    """Check if the catalog_variants table is reachable.

    Returns:
        True if database is accessible, False otherwise
    """
    try:
        engine = create_async_engine(
            settings.database_url,
            connect_args={"server_settings": {"application_name": "health_check"}},
            pool_pre_ping=True,
        )
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1 FROM catalog_variants LIMIT 1"))
        await engine.dispose()
        return True
    except Exception as e:
        print(f"Database health check failed: {e}", file=sys.stderr)
        return False


async def main() -> int:
    """Run health checks and return exit code.

    Returns:
        0 if all checks pass, 1 otherwise
    """
    if not await check_database_connection():
        print("Health check failed: Database connection unavailable", file=sys.stderr)
        return 1

    print("Health check passed: Variant store available")
    return 0


# Only execute when run directly as a script
if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
