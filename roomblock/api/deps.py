"""Shared API dependencies — single import point for all routers.

Re-exports the database session and caller identity dependencies so that
router modules can import everything they need from one place::

    from roomblock.api.deps import get_caller, get_db
"""

from roomblock.auth.dependencies import get_caller
from roomblock.database import get_db

__all__ = [
    "get_caller",
    "get_db",
]
