"""Shop repositories.

Two storage adapters serve the same ranking core:
- InMemoryShopRepository: demo shop list kept in process memory
- PostgresShopRepository: the `shops` table via async SQLAlchemy

Both hand out immutable VoteRecords; vote counts are validated by
VoteRecord before anything is stored.
"""

import asyncio
from collections.abc import Iterable
import logging
from typing import Protocol

from sqlalchemy import select

from shoprank.models import Shop
from shoprank.services.votes import VoteRecord
from shoprank.settings import get_settings
from shoprank.stores.postgres import get_session

logger = logging.getLogger("uvicorn.error")


# Demo data with deliberately extreme vote counts
DEMO_SHOPS: list[tuple[str, int, int]] = [
    ("Shop A (established, many votes)", 95, 5),  # 95%
    ("Shop B (new, a single vote)", 1, 0),  # 100% under the simple average
    ("Shop C (mid-size)", 18, 2),  # 90%
    ("Shop D (chain)", 300, 100),  # 75%
]


class ShopRepository(Protocol):
    """Storage used by the ranking routes."""

    async def list_shops(self) -> list[VoteRecord]:
        """Return all shops, newest first."""
        ...

    async def add_shop(self, name: str, up_votes: int = 0, down_votes: int = 0) -> VoteRecord:
        """Store a new shop and return its record."""
        ...


class InMemoryShopRepository:
    """Process-local shop list (demo deployment, tests)."""

    def __init__(self, shops: Iterable[tuple[str, int, int]] = ()) -> None:
        self._records: list[VoteRecord] = []
        self._next_id = 1
        self._lock = asyncio.Lock()
        for name, up_votes, down_votes in shops:
            self._append(name, up_votes, down_votes)

    @classmethod
    def with_demo_shops(cls) -> "InMemoryShopRepository":
        return cls(DEMO_SHOPS)

    def _append(self, name: str, up_votes: int, down_votes: int) -> VoteRecord:
        record = VoteRecord(id=self._next_id, name=name, up_votes=up_votes, down_votes=down_votes)
        self._records.append(record)
        self._next_id += 1
        return record

    async def list_shops(self) -> list[VoteRecord]:
        async with self._lock:
            return list(reversed(self._records))

    async def add_shop(self, name: str, up_votes: int = 0, down_votes: int = 0) -> VoteRecord:
        async with self._lock:
            record = self._append(name, up_votes, down_votes)
        logger.info(f"Shop added (memory): id={record.id} name={record.name!r}")
        return record


class PostgresShopRepository:
    """Shops table in PostgreSQL."""

    async def list_shops(self) -> list[VoteRecord]:
        async with get_session() as session:
            result = await session.execute(
                select(Shop).order_by(Shop.created_at.desc(), Shop.id.desc())
            )
            return [shop.to_record() for shop in result.scalars().all()]

    async def add_shop(self, name: str, up_votes: int = 0, down_votes: int = 0) -> VoteRecord:
        # Validate counts before touching the database.
        draft = VoteRecord(id=0, name=name, up_votes=up_votes, down_votes=down_votes)

        async with get_session() as session:
            shop = Shop(name=draft.name, up_votes=draft.up_votes, down_votes=draft.down_votes)
            session.add(shop)
            await session.flush()
            record = shop.to_record()

        logger.info(f"Shop added (postgres): id={record.id} name={record.name!r}")
        return record


# Memory repository (one per process, created on first use)
_memory_repository: InMemoryShopRepository | None = None


def get_shop_repository() -> ShopRepository:
    """FastAPI dependency selecting the storage adapter from settings."""
    global _memory_repository
    if get_settings().storage_backend == "postgres":
        return PostgresShopRepository()
    if _memory_repository is None:
        _memory_repository = InMemoryShopRepository.with_demo_shops()
    return _memory_repository


def reset_memory_repository() -> None:
    """Forget the in-memory shop list (next request starts from the demo data)."""
    global _memory_repository
    _memory_repository = None
