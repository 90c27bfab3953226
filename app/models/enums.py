"""PostgreSQL-backed enum types for the ORM models.

Each StrEnum maps 1:1 to a PostgreSQL CREATE TYPE ... AS ENUM.
"""

from enum import StrEnum


class GenderEnum(StrEnum):
    """Farmer gender as captured by the registration form."""

    male = "male"
    female = "female"


class CropStatusEnum(StrEnum):
    """Lifecycle stage of a planted crop."""

    planted = "planted"
    growing = "growing"
    harvested = "harvested"


class EquipmentConditionEnum(StrEnum):
    """Physical condition of a piece of farm equipment."""

    new = "new"
    good = "good"
    fair = "fair"
    poor = "poor"
