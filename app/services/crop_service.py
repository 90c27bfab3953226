"""Crop and fertilization services."""

from __future__ import annotations

from app.models.crops import Crop, Fertilization
from app.services.crud_service import CrudService


class CropService(CrudService[Crop]):
	model = Crop
	label = "Crop"
	search_columns = (Crop.name, Crop.variety)
	references = {"farm_id": "Farm"}


class FertilizationService(CrudService[Fertilization]):
	model = Fertilization
	label = "Fertilization record"
	search_columns = (Fertilization.type,)
	references = {"crop_id": "Crop"}
