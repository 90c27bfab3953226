"""Equipment and sale services."""

from __future__ import annotations

from app.models.operations import Equipment, Sale
from app.services.crud_service import CrudService


class EquipmentService(CrudService[Equipment]):
	model = Equipment
	label = "Equipment"
	search_columns = (Equipment.name, Equipment.condition)
	references = {"farm_id": "Farm"}


class SaleService(CrudService[Sale]):
	model = Sale
	label = "Sale"
	search_columns = (Sale.product_type, Sale.product_name, Sale.buyer_name)
	references = {"farm_id": "Farm"}
