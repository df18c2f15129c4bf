"""
Create Admin Script

Creates an Admin account, or promotes an existing account to Admin.
Roles cannot be changed over HTTP, so this is the way to seed the first
administrator outside of BOOTSTRAP_ADMIN_* settings.

Run from project root:
    python scripts/create_admin.py --email admin@example.com --password s3cret! --name admin
"""

import argparse
import asyncio
import sys

from foodorder.core.config import get_settings, setup_logging
from foodorder.core.errors import AppError
from foodorder.database import Database
from foodorder.services.users import UserStore


async def create_admin(name: str, email: str, password: str) -> int:
    settings = get_settings()
    database = Database(settings.database_url, echo=settings.database_echo)
    await database.connect()
    try:
        async with database.session() as session:
            store = UserStore(session, password_min_length=settings.password_min_length)
            admin = await store.ensure_admin(name, email, password)
    except AppError as e:
        print(f"❌ {e.message}")
        return 1
    finally:
        await database.dispose()

    print(f"✅ {admin.email} is an Admin (user #{admin.id})")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or promote an Admin account")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--name", default="admin")
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(create_admin(args.name, args.email, args.password)))


if __name__ == "__main__":
    main()
