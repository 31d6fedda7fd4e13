"""
Django admin configuration for products app.
"""

from typing import ClassVar

from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for products."""

    list_display: ClassVar[list[str]] = ('title', 'price', 'published', 'user', 'created_at')
    list_filter: ClassVar[list[str]] = ('published', 'created_at')
    search_fields: ClassVar[list[str]] = ('title', 'user__email')
    raw_id_fields: ClassVar[tuple[str, ...]] = ('user',)
    readonly_fields: ClassVar[list[str]] = ('created_at', 'updated_at')
