"""ORM model registry: importing this module registers every table on Base.metadata.

Alembic ``env.py`` imports ``Base`` from here (not from ``base.py``) so that
autogenerate sees all tables.  Application code can also do::

    from app.models import Farm, Crop, Sale, ...
"""

# ── Base & Mixins ───────────────────────────────────────────────────────────
from app.models.base import Base, BigIntPrimaryKeyMixin, CreatedAtMixin

# ── Crops ───────────────────────────────────────────────────────────────────
from app.models.crops import Crop, Fertilization

# ── Enums ───────────────────────────────────────────────────────────────────
from app.models.enums import CropStatusEnum, EquipmentConditionEnum, GenderEnum

# ── Ownership chain ─────────────────────────────────────────────────────────
from app.models.farm import Farm, Farmer

# ── Operations ──────────────────────────────────────────────────────────────
from app.models.operations import Equipment, Sale

# ── Users ───────────────────────────────────────────────────────────────────
from app.models.user import User

__all__ = [
    # Base & mixins
    "Base",
    "BigIntPrimaryKeyMixin",
    "CreatedAtMixin",
    # Entities
    "Crop",
    "Equipment",
    "Farm",
    "Farmer",
    "Fertilization",
    "Sale",
    # Auth
    "User",
    # Enums
    "CropStatusEnum",
    "EquipmentConditionEnum",
    "GenderEnum",
]
