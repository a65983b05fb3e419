#!/usr/bin/env python3
"""Seed database with the demo shops.

Creates:
- shops table (if missing)
- The four demo shops with deliberately extreme vote counts

Seed script is idempotent (shops are matched by name).

Usage:
    python -m scripts.seed
    python -m scripts.seed --reset   # drop and recreate tables first
"""

import argparse
import asyncio

from dotenv import load_dotenv
from sqlalchemy import select

from shoprank.models import Shop
from shoprank.services.ranking import rank_records
from shoprank.services.scoring import ScoringMethod
from shoprank.stores.postgres import close_db, create_tables, drop_tables, get_session, init_db
from shoprank.stores.shops import DEMO_SHOPS

load_dotenv()


async def seed_database(reset: bool = False) -> None:
    """Create tables and insert missing demo shops."""
    await init_db()
    try:
        if reset:
            print("🗑️  Dropping tables...")
            await drop_tables()
        await create_tables()

        async with get_session() as session:
            for name, up_votes, down_votes in DEMO_SHOPS:
                result = await session.execute(select(Shop).where(Shop.name == name))
                if result.scalar_one_or_none():
                    print(f"  ⏭️  {name} (exists)")
                    continue
                session.add(Shop(name=name, up_votes=up_votes, down_votes=down_votes))
                print(f"  ✅ {name} (+{up_votes}/-{down_votes})")

        async with get_session() as session:
            result = await session.execute(select(Shop).order_by(Shop.id))
            records = [shop.to_record() for shop in result.scalars().all()]

        print("\nBayesian ranking:")
        for item in rank_records(records, ScoringMethod.BAYESIAN):
            print(
                f"  #{item.rank} {item.record.name}: "
                f"simple={item.simple_score:.1%} bayesian={item.bayesian_score:.1%}"
            )
    finally:
        await close_db()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the shops table with demo data")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate tables first")
    args = parser.parse_args()
    asyncio.run(seed_database(reset=args.reset))


if __name__ == "__main__":
    main()
