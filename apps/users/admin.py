"""
Django admin configuration for Users app
"""

from typing import ClassVar

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Email-based user admin"""

    list_display: ClassVar[list[str]] = (
        'email', 'get_full_name', 'is_staff', 'is_active', 'last_login', 'date_joined'
    )
    list_filter: ClassVar[list[str]] = ('is_active', 'is_staff', 'date_joined')
    search_fields: ClassVar[list[str]] = ('email', 'first_name', 'last_name')
    ordering: ClassVar[tuple[str, ...]] = ('email',)

    fieldsets: ClassVar[tuple] = (
        (None, {'fields': ('email', 'password')}),
        ('Personal info', {'fields': ('first_name', 'last_name')}),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets: ClassVar[tuple] = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2'),
        }),
    )
