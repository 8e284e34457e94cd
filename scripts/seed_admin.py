"""Create the first admin shop and print an access token for it.

Write endpoints are admin-only, so a fresh deployment needs one admin
shop before anything else can be created through the API.

Usage:
    python scripts/seed_admin.py admin@example.org "1 Admin Plaza"
"""

import argparse
import asyncio
import sys
import os

# Add backend to path so we can import app modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from sqlalchemy import select

from app.db.session import async_session_factory, engine
from app.db.utils import create_tables
from app.models.shop import Role, Shop
from app.services.auth_service import create_access_token


async def seed_admin(email: str, address: str, name: str = "Admin") -> None:
    """Create the admin shop unless one with this email exists, then print a token.

    Idempotent: an existing shop with the same email is promoted to admin
    instead of being duplicated.
    """
    await create_tables(engine)

    async with async_session_factory() as session:
        result = await session.execute(
            select(Shop).where(Shop.email == email.strip().lower())
        )
        shop = result.scalar_one_or_none()

        if shop:
            print(f"  Shop '{shop.email}' already exists, ensuring admin role")
            shop.role = Role.ADMIN
        else:
            shop = Shop(email=email, address=address, name=name, role=Role.ADMIN)
            session.add(shop)
            print(f"  Added admin shop: {email}")

        await session.commit()
        await session.refresh(shop)

    print(f"\n  Shop id: {shop.id}")
    print(f"  Access token: {create_access_token(shop.id)}\n")

    await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("email")
    parser.add_argument("address")
    parser.add_argument("--name", default="Admin")
    args = parser.parse_args()
    asyncio.run(seed_admin(args.email, args.address, args.name))


if __name__ == "__main__":
    main()
