"""
Core App Configuration
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Shared infrastructure: audit trail, health check, error handling."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'hospital_backend.core'
    verbose_name = 'Core (Audit & System)'
