"""
Standalone script to create the database tables.

Connects to the configured database (production by default, the test database
with --test), verifies the connection and creates any missing tables. Existing
tables and rows are left untouched.
"""

import argparse
import asyncio
import os
import sys

# --- Path Setup ---
# Allows running the script from a checkout without installing the package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from salary_tracker_backend.common.config import settings
from salary_tracker_backend.database import engine as db_engine


async def init_db(database_url: str):
    db_engine.create_db_engine_and_session_factory(database_url)
    try:
        await db_engine.verify_db_connection()
        await db_engine.create_db_schema()
    finally:
        await db_engine.dispose_db_engine()


def main():
    parser = argparse.ArgumentParser(description="Create the salary tracker tables.")
    parser.add_argument("--test", action="store_true", help="Use DATABASE_URL_TEST instead of DATABASE_URL_PROD.")
    args = parser.parse_args()

    database_url = settings.DATABASE_URL_TEST if args.test else settings.DATABASE_URL_PROD
    print(f"Creating tables on the {'TEST' if args.test else 'PRODUCTION'} database...")
    asyncio.run(init_db(database_url))
    print("Done.")


if __name__ == "__main__":
    main()
