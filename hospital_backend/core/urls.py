"""Core App URLs.

Prefix: /api/
Routes:
    GET  /api/health/       - Health check
"""

from django.urls import path

from hospital_backend.core.views import health

app_name = 'core'

urlpatterns = [
    path('health/', health, name='health'),
]
