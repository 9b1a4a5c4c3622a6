"""ORM models. Import every model here so alembic autogenerate sees it."""

from taskeval.models.summary import Summary

__all__ = ["Summary"]
