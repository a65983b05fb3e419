"""SQLAlchemy ORM models.

Models represent database tables:
- shops: Shops with up/down vote counts
"""

from shoprank.models.shop import Shop

__all__ = ["Shop"]
