"""
Admin configuration for the AI Services app.
"""
from django.contrib import admin

from apps.ai_services.models import AISuggestion


@admin.register(AISuggestion)
class AISuggestionAdmin(admin.ModelAdmin):
    list_display = ['city', 'day', 'trip', 'created_at']
    search_fields = ['city', 'hash']
    readonly_fields = ['hash', 'created_at']
