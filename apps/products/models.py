"""
Product Catalog models for the Marketplace API
Products are listed by a seller and referenced by order placements.
"""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models.query import QuerySet
from django.utils.translation import gettext_lazy as _


class ProductQuerySet(QuerySet):
    """Catalog filters shared by the API and the order services"""

    def published(self) -> ProductQuerySet:
        return self.filter(published=True)

    def owned_by(self, user_id: int) -> ProductQuerySet:
        return self.filter(user_id=user_id)


class Product(models.Model):
    """
    Sellable item listed by a user.
    The price is read at order time and copied into the order total, so later
    price changes never reprice existing orders.
    """

    title = models.CharField(max_length=200, help_text=_("Product title shown to buyers"))
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text=_("Unit price"),
    )
    published = models.BooleanField(default=False, help_text=_("Visible in the public catalog"))

    # Seller relationship
    user = models.ForeignKey(
        'users.User',
        on_delete=models.CASCADE,
        related_name='products',
        help_text=_("User who listed the product"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        db_table = 'products'
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering: ClassVar[tuple[str, ...]] = ('id',)
        indexes: ClassVar[tuple[models.Index, ...]] = (
            models.Index(fields=['user', 'published'], name='products_user_pub_idx'),
        )
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name='products_price_non_negative',
            ),
        ]

    def __str__(self) -> str:
        return self.title
