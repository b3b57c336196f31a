"""
Provision a receptionist or doctor account.
Run with: python -m medportal.scripts.create_user <username> <role>
"""

import argparse
import asyncio
import getpass

from medportal.core.security import create_token_issuer
from medportal.database import Database
from medportal.features.auth.models import ROLES
from medportal.features.auth.repository import SQLAlchemyUserRepository
from medportal.features.auth.service import AuthService


async def create_user(username: str, password: str, role: str):
    await Database.connect_db()
    try:
        async with Database.session_factory() as session:
            service = AuthService(SQLAlchemyUserRepository(session), create_token_issuer())
            user = await service.create_user(username, password, role)
            print(f"Created {user.role} '{user.username}' with id {user.id}")
    finally:
        await Database.close_db()


def main():
    parser = argparse.ArgumentParser(description="Create a portal user")
    parser.add_argument("username")
    parser.add_argument("role", choices=ROLES)
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        parser.error("Passwords do not match")

    asyncio.run(create_user(args.username, password, args.role))


if __name__ == "__main__":
    main()
