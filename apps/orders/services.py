"""
Order Management Services for the Marketplace API
Order intake (validate, resolve, price, persist, notify) and ownership-scoped queries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from functools import partial
from typing import TYPE_CHECKING, Any

from django.conf import settings
from django.db import DatabaseError, transaction

from apps.common.types import Err, Ok, ProductID, Result
from apps.common.validators import log_security_event
from apps.products.models import Product

from .exceptions import OrderNotFoundError, OrderPersistenceError, OrderValidationError
from .models import Order, Placement

if TYPE_CHECKING:
    from apps.users.models import User

logger = logging.getLogger(__name__)

TOTAL_QUANTUM = Decimal('0.01')

# Primary key range of a BigAutoField column
MAX_PRODUCT_ID = 2**63 - 1

# ===============================================================================
# ORDER SERVICE PARAMETER OBJECTS
# ===============================================================================

@dataclass(frozen=True)
class ResolvedOrderLines:
    """Products resolved for an intake request, one entry per requested id"""
    product_ids: list[ProductID]
    products: list[Product]


def _is_integral(value: Decimal) -> bool:
    return value.is_finite() and value == value.to_integral_value()

# ===============================================================================
# ORDER PRICING SERVICE
# ===============================================================================

class OrderPricingService:
    """Server-authoritative order pricing"""

    @staticmethod
    def calculate_total(products: Iterable[Product]) -> Decimal:
        """Sum product prices, once per placement"""
        total = sum((product.price for product in products), Decimal('0.00'))
        return Decimal(total).quantize(TOTAL_QUANTUM)

# ===============================================================================
# ORDER INTAKE SERVICE
# ===============================================================================

class OrderIntakeService:
    """
    Turns a list of product ids into a persisted order.

    Each stage returns a Result consumed by the next one. Nothing is written
    until every id resolved and the total passed the guard; the order and its
    placements are then written in one transaction. The confirmation email is
    sent once the outermost transaction commits and its failure never fails
    the order.
    """

    @classmethod
    def place_order(cls, user: User, product_ids: Any) -> Result[Order, OrderValidationError]:
        validated = cls._validate(product_ids)
        if validated.is_err():
            return validated

        resolved = cls._resolve_products(validated.unwrap())
        if resolved.is_err():
            return resolved

        lines = resolved.unwrap()
        total = OrderPricingService.calculate_total(lines.products)
        if total < 0:
            logger.error(f"🔥 [Orders] Refusing negative total {total} for user {user.pk}")
            return Err(OrderValidationError.negative_total())

        order = cls._persist(user, lines, total)

        log_security_event(
            'order_created',
            {
                'order_id': order.pk,
                'user_id': user.pk,
                'placements': len(lines.products),
                'total': str(total),
            }
        )
        logger.info(f"📦 [Orders] Order #{order.pk} placed by user {user.pk}: {len(lines.products)} products, total {total}")

        transaction.on_commit(partial(cls._notify, order))
        return Ok(order)

    @staticmethod
    def _validate(product_ids: Any) -> Result[list[ProductID], OrderValidationError]:
        """Check request shape and the empty-order policy"""
        if product_ids is None or isinstance(product_ids, (str, bytes, dict)) or not isinstance(product_ids, Sequence):
            return Err(OrderValidationError.invalid("product_ids must be a list of product identifiers"))

        normalized: list[ProductID] = []
        for raw_id in product_ids:
            if isinstance(raw_id, (bool, float)) or (isinstance(raw_id, Decimal) and not _is_integral(raw_id)):
                return Err(OrderValidationError.invalid(f"Invalid product identifier: {raw_id!r}"))
            try:
                normalized.append(int(raw_id))
            except (TypeError, ValueError):
                return Err(OrderValidationError.invalid(f"Invalid product identifier: {raw_id!r}"))

        if not normalized and not getattr(settings, 'ORDERS_ALLOW_EMPTY', True):
            return Err(OrderValidationError.empty())

        return Ok(normalized)

    @staticmethod
    def _resolve_products(product_ids: list[ProductID]) -> Result[ResolvedOrderLines, OrderValidationError]:
        """Load every requested product; the first unknown id fails the request"""
        # Ids outside the key range cannot exist and would overflow the query
        lookup_ids = {product_id for product_id in product_ids if 0 < product_id <= MAX_PRODUCT_ID}
        products_by_id = Product.objects.in_bulk(lookup_ids)
        for product_id in product_ids:
            if product_id not in products_by_id:
                logger.warning(f"⚠️ [Orders] Product not found during intake: {product_id}")
                return Err(OrderValidationError.product_not_found(product_id))

        return Ok(ResolvedOrderLines(
            product_ids=product_ids,
            products=[products_by_id[product_id] for product_id in product_ids],
        ))

    @staticmethod
    def _persist(user: User, lines: ResolvedOrderLines, total: Decimal) -> Order:
        """Write the order and its placements as one unit"""
        try:
            with transaction.atomic():
                order = Order.objects.create(user=user, total=total)
                Placement.objects.bulk_create([
                    Placement(order=order, product=product) for product in lines.products
                ])
        except DatabaseError as e:
            logger.exception(f"🔥 [Orders] Failed to persist order for user {user.pk}: {e}")
            raise OrderPersistenceError(f"Failed to persist order: {e!s}") from e

        return order

    @staticmethod
    def _notify(order: Order) -> None:
        """Best-effort confirmation email"""
        try:
            from apps.notifications.services import EmailService  # noqa: PLC0415

            EmailService.send_order_confirmation(order)
        except Exception as e:
            logger.exception(f"🔥 [Orders] Failed to send confirmation email for order #{order.pk}: {e}")

# ===============================================================================
# ORDER QUERY SERVICE
# ===============================================================================

class OrderQueryService:
    """Ownership-scoped order lookups"""

    @staticmethod
    def list_orders(user: User) -> list[Order]:
        """All orders placed by the user, oldest first"""
        return list(
            Order.objects.filter(user=user)
            .prefetch_related('placements__product')
            .order_by('id')
        )

    @staticmethod
    def get_order(user: User, order_id: Any) -> Result[Order, OrderNotFoundError]:
        """
        Fetch one order owned by the user.
        Someone else's order and a missing order produce the same error.
        """
        try:
            order = (
                Order.objects.select_related('user')
                .prefetch_related('placements__product')
                .get(pk=order_id, user=user)
            )
        except (Order.DoesNotExist, ValueError, TypeError):
            return Err(OrderNotFoundError(order_id))

        return Ok(order)
