"""
Django Admin configuration for the Ledger app.
"""

from django.contrib import admin

from apps.ledger.infrastructure.persistence.models import Account, Profile


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Admin interface for Account model."""

    list_display = ('name', 'user', 'account_type', 'balance', 'currency', 'is_active')
    list_filter = ('account_type', 'currency', 'is_active')
    search_fields = ('name', 'user__username')
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        ('Account Information', {
            'fields': ('user', 'name', 'account_type', 'color')
        }),
        ('Balance', {
            'fields': ('balance', 'currency', 'allows_negative_balance', 'is_active')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin interface for Profile model."""

    list_display = ('user', 'currency')
    list_filter = ('currency',)
