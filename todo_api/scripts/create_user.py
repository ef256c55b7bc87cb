"""
Provision a user account.

Usage:
    python -m todo_api.scripts.create_user alice s3cret
    python -m todo_api.scripts.create_user root s3cret --admin
"""
import argparse
import asyncio
import logging
import sys

from todo_api.database import AsyncSessionLocal, create_tables, engine
from todo_api.exceptions import ValidationError
from todo_api.logging_setup import setup_logging
from todo_api.models.user import Role
from todo_api.services.users import create_user

logger = logging.getLogger(__name__)


async def provision(username: str, password: str, admin: bool) -> int:
    await create_tables()
    roles = {Role.USER, Role.ADMIN} if admin else {Role.USER}
    try:
        async with AsyncSessionLocal() as db:
            try:
                user = await create_user(db, username, password, roles)
            except ValidationError as e:
                logger.error("Could not create user: %s", e.detail)
                return 1
            await db.commit()
            print(f"Created user '{user.username}' (ID: {user.id}) with roles: "
                  f"{', '.join(sorted(r.value for r in roles))}")
            return 0
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Todo API user")
    parser.add_argument("username")
    parser.add_argument("password")
    parser.add_argument("--admin", action="store_true", help="grant ROLE_ADMIN as well as ROLE_USER")
    args = parser.parse_args(argv)

    setup_logging(error_log_path="")
    return asyncio.run(provision(args.username, args.password, args.admin))


if __name__ == "__main__":
    sys.exit(main())
