"""
Surgeries App Configuration
"""

from django.apps import AppConfig


class SurgeriesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'hospital_backend.surgeries'
    verbose_name = 'Surgeries (Planning)'
