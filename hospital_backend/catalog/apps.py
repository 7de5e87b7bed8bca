"""
Catalog App Configuration
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    """Server-rendered HTML pages for doctors, patients and surgeries."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'hospital_backend.catalog'
    verbose_name = 'Catalog (HTML)'
