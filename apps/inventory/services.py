import logging
from typing import Dict, Iterable, Optional

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.catalog.models import Fruit
from apps.utils.exceptions import BusinessLogicException

from .models import StockHistory

logger = logging.getLogger(__name__)


class InventoryService:
    """
    Core Logic for Inventory Management.
    ALL stock changes must pass through here.
    """

    @staticmethod
    def lock_fruits(fruit_ids: Iterable) -> Dict[str, Fruit]:
        """
        Locks fruit rows in deterministic (pk) order to prevent deadlocks.
        Must be called inside an atomic block.
        """
        ids = sorted({str(fid) for fid in fruit_ids})
        fruits = Fruit.objects.select_for_update().filter(id__in=ids).order_by("id")
        return {str(f.id): f for f in fruits}

    @staticmethod
    def record_movement(fruit_id, quantity: int, movement_type: str, description: str = "",
                        user_id=None) -> StockHistory:
        return StockHistory.objects.create(
            fruit_id=fruit_id,
            quantity=quantity,
            movement_type=movement_type,
            description=description,
            user_id=user_id,
        )

    @staticmethod
    @transaction.atomic
    def decrement_stock(fruit_id, quantity: int, description: str = "", user_id=None) -> StockHistory:
        """
        Conditional decrement: the UPDATE only matches while stock >= quantity,
        so two concurrent buyers can never push stock below zero.
        """
        updated = Fruit.objects.filter(pk=fruit_id, stock__gte=quantity).update(
            stock=F("stock") - quantity,
            updated_at=timezone.now(),
        )
        if updated == 0:
            fruit = Fruit.objects.filter(pk=fruit_id).only("name").first()
            name = fruit.name if fruit else "fruit"
            raise BusinessLogicException(f"Insufficient stock for {name}", code="insufficient_stock")

        return InventoryService.record_movement(
            fruit_id, quantity, StockHistory.MovementType.OUT, description, user_id
        )

    @staticmethod
    @transaction.atomic
    def restore_stock(fruit_id, quantity: int, description: str = "", user_id=None) -> StockHistory:
        """
        Compensating increment (e.g. order cancellation).
        """
        Fruit.objects.filter(pk=fruit_id).update(
            stock=F("stock") + quantity,
            updated_at=timezone.now(),
        )
        return InventoryService.record_movement(
            fruit_id, quantity, StockHistory.MovementType.IN, description, user_id
        )

    @staticmethod
    @transaction.atomic
    def adjust_stock(fruit_id, delta: int, user_id=None, description: Optional[str] = None) -> Fruit:
        """
        Manual override for admins. Positive delta restocks, negative delta writes off.
        """
        if delta == 0:
            raise BusinessLogicException("Adjustment quantity must not be zero", code="invalid_quantity")

        locked = InventoryService.lock_fruits([fruit_id])
        fruit = locked.get(str(fruit_id))
        if fruit is None:
            raise BusinessLogicException("Fruit not found", code="not_found")

        description = description or "Manual stock adjustment"
        if delta > 0:
            InventoryService.restore_stock(fruit.id, delta, description, user_id)
        else:
            InventoryService.decrement_stock(fruit.id, -delta, description, user_id)

        fruit.refresh_from_db()
        logger.info(f"Stock adjusted for {fruit.id} by {delta}. New stock: {fruit.stock}")
        return fruit
