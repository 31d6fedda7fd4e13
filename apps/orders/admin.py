"""
Django admin configuration for orders app.
"""

from typing import ClassVar

from django.contrib import admin

from .models import Order, Placement


class PlacementInline(admin.TabularInline):
    """Read-only line items; placements only come from order intake"""

    model = Placement
    extra = 0
    can_delete = False
    readonly_fields: ClassVar[tuple[str, ...]] = ('product', 'created_at')

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for orders."""

    list_display: ClassVar[list[str]] = ('id', 'user', 'total', 'created_at')
    list_filter: ClassVar[list[str]] = ('created_at',)
    search_fields: ClassVar[list[str]] = ('user__email',)
    readonly_fields: ClassVar[list[str]] = ('user', 'total', 'created_at', 'updated_at')
    inlines: ClassVar[list] = [PlacementInline]

    def has_add_permission(self, request) -> bool:
        return False
