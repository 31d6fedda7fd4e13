"""
Order Management models for the Marketplace API
An order is a purchase by one user; placements are its line items.
"""

from decimal import Decimal
from typing import ClassVar

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

# ===============================================================================
# ORDER MANAGEMENT MODELS
# ===============================================================================

class Order(models.Model):
    """
    Purchase placed by a user.

    The total is computed by the intake service from product prices at
    creation time. It is not editable and is never recalculated, so a later
    price change on a product does not alter past orders.
    """

    # Purchaser relationship
    user = models.ForeignKey(
        'users.User',
        on_delete=models.CASCADE,
        related_name='orders',
        help_text=_("User who placed the order")
    )

    total = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        editable=False,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text=_("Sum of product prices at order time")
    )

    products = models.ManyToManyField(
        'products.Product',
        through='Placement',
        related_name='orders',
        blank=True,
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        verbose_name = _('Order')
        verbose_name_plural = _('Orders')
        ordering: ClassVar[tuple[str, ...]] = ('id',)
        indexes: ClassVar[tuple[models.Index, ...]] = (
            models.Index(fields=['user', 'created_at'], name='orders_user_created_idx'),
        )
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.CheckConstraint(
                condition=models.Q(total__gte=0),
                name='orders_total_non_negative',
            ),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} - {self.user.email}"

    @property
    def product_count(self) -> int:
        """Number of placements, duplicates included"""
        return self.placements.count()


class Placement(models.Model):
    """
    Line item linking one order to one product.
    The same product may be placed several times on one order.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='placements'
    )

    product = models.ForeignKey(
        'products.Product',
        on_delete=models.CASCADE,
        related_name='placements'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'placements'
        verbose_name = _('Placement')
        verbose_name_plural = _('Placements')
        ordering: ClassVar[tuple[str, ...]] = ('id',)

    def __str__(self) -> str:
        return f"{self.product.title} on order #{self.order_id}"
