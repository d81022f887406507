#!/usr/bin/env python
"""Create the favorites tables on the configured database."""
import asyncio

from dotenv import load_dotenv

load_dotenv()

from mortydex.db.connection import create_engine, get_database_url, init_db
from mortydex.main import validate_environment


async def main() -> None:
    engine = create_engine()
    try:
        await init_db(engine)
    finally:
        await engine.dispose()
    print(f"✓ Favorites tables ready on {get_database_url()}")


if __name__ == "__main__":
    validate_environment()
    asyncio.run(main())
