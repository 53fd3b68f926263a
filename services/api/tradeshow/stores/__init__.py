"""Data stores for persistence and locking.

Stores handle:
- PostgreSQL: engine, sessions, ORM base
- Redis: optional locks guarding sync runs

No business/sync logic in stores - that belongs in services.
"""
