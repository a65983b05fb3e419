"""Data stores for persistence and caching.

Stores handle:
- PostgreSQL: DB session, shops table access
- In-memory: demo shop list (no database required)
- Redis: ranking payload cache, TTL policies

No scoring/ranking logic in stores - that belongs in services.
"""
