import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Avg, Count, Q, Sum

from apps.inventory.models import StockHistory
from apps.inventory.services import InventoryService
from apps.utils.exceptions import BusinessLogicException

from .models import Fruit

logger = logging.getLogger(__name__)


class FruitService:

    @staticmethod
    def get_fruit(fruit_id) -> Fruit:
        try:
            return Fruit.objects.get(pk=fruit_id)
        except Fruit.DoesNotExist:
            raise BusinessLogicException("Fruit not found", code="not_found")

    @staticmethod
    @transaction.atomic
    def create_fruit(data: dict, user_id=None) -> Fruit:
        fruit = Fruit.objects.create(
            name=data["name"],
            price=data["price"],
            stock=data.get("stock", 0),
            image=data.get("image", ""),
        )
        if fruit.stock > 0:
            InventoryService.record_movement(
                fruit.id, fruit.stock, StockHistory.MovementType.IN, "Initial stock", user_id
            )
        logger.info(f"Fruit created: {fruit.id} ({fruit.name})")
        return fruit

    @staticmethod
    @transaction.atomic
    def update_fruit(fruit_id, data: dict, user_id=None) -> Fruit:
        """
        Editing the stock field from the product form goes through the
        inventory ledger so the change shows up in the stock history.
        """
        locked = InventoryService.lock_fruits([fruit_id])
        fruit = locked.get(str(fruit_id))
        if fruit is None:
            raise BusinessLogicException("Fruit not found", code="not_found")

        for field in ("name", "price", "image"):
            if field in data:
                setattr(fruit, field, data[field])
        fruit.save(update_fields=["name", "price", "image", "updated_at"])

        if "stock" in data and data["stock"] != fruit.stock:
            delta = data["stock"] - fruit.stock
            InventoryService.adjust_stock(fruit.id, delta, user_id, "Stock updated from product form")
            fruit.refresh_from_db()

        return fruit

    @staticmethod
    @transaction.atomic
    def delete_fruit(fruit_id):
        fruit = FruitService.get_fruit(fruit_id)
        if fruit.order_items.exists():
            raise BusinessLogicException("Cannot delete a fruit that has been ordered", code="in_use")

        fruit.delete()
        logger.info(f"Fruit deleted: {fruit_id}")

    @staticmethod
    def in_stock():
        return Fruit.objects.filter(stock__gt=0).order_by("name")

    @staticmethod
    def get_fruit_stats() -> dict:
        threshold = settings.LOW_STOCK_THRESHOLD
        stats = Fruit.objects.aggregate(
            total_fruits=Count("id"),
            in_stock=Count("id", filter=Q(stock__gt=0)),
            low_stock=Count("id", filter=Q(stock__gt=0, stock__lte=threshold)),
            out_of_stock=Count("id", filter=Q(stock=0)),
            total_stock=Sum("stock"),
            average_price=Avg("price"),
        )
        stats["total_stock"] = stats["total_stock"] or 0
        stats["average_price"] = Decimal(stats["average_price"] or 0).quantize(Decimal("0.01"))
        return stats
