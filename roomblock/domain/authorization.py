"""Capability checks shared by every mutating operation.

Both predicates are pure: they compare identities and nothing else, so the
caller is responsible for loading the admin record or resource owner inside
the same transaction as the write it guards.
"""


def is_admin(caller: str, admin: str) -> bool:
    """True when ``caller`` holds the registry admin capability."""
    return bool(caller) and caller == admin


def is_owner(caller: str, resource_owner: str) -> bool:
    """True when ``caller`` owns the resource (a room block or its attrition policy)."""
    return bool(caller) and caller == resource_owner
