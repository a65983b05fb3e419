"""Shop model.

Represents a shop with its crowd-sourced up/down vote counts.
Scores are never stored; they are recomputed from the counts on every ranking.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from shoprank.services.votes import VoteRecord
from shoprank.stores.postgres import Base


class Shop(Base):
    """Shop with vote counts."""

    __tablename__ = "shops"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_shops_upvotes_non_negative"),
        CheckConstraint("downvotes >= 0", name="ck_shops_downvotes_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))

    # Vote counts (column names match the original shops table)
    up_votes: Mapped[int] = mapped_column("upvotes", default=0, server_default="0")
    down_votes: Mapped[int] = mapped_column("downvotes", default=0, server_default="0")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        index=True,
    )

    def to_record(self) -> VoteRecord:
        """Convert the row to the value object the ranking core reads."""
        return VoteRecord(
            id=self.id,
            name=self.name,
            up_votes=self.up_votes,
            down_votes=self.down_votes,
        )

    def __repr__(self) -> str:
        return f"<Shop {self.name} (+{self.up_votes}/-{self.down_votes})>"
