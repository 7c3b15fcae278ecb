#!/usr/bin/env python3
"""Create the cities table and its indexes in the configured database."""

import asyncio
import os
import sys

# Add src to path so the script runs from a checkout
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from cities_api.config import settings
from cities_api.database import Store


async def main() -> None:
    store = Store.from_url(settings.database_url, settings.pool_size)
    try:
        await store.create_schema()
        print("✓ cities table")
    finally:
        await store.dispose()


if __name__ == "__main__":
    asyncio.run(main())
