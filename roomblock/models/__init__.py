"""SQLAlchemy models for the room-block attrition service.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from roomblock.models.attrition_policy import AttritionPolicy
from roomblock.models.property import Property
from roomblock.models.registry_admin import RegistryAdmin
from roomblock.models.room_block import RoomBlock

__all__ = [
    "AttritionPolicy",
    "Property",
    "RegistryAdmin",
    "RoomBlock",
]
