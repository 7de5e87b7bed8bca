"""Surgeries App URLs.

Prefix: /api/
Routes:
    GET                 /api/                   - Record counts
    GET/POST            /api/surgeries/         - List (filterable)/Create surgery
    POST                /api/surgeries/check/   - Dry-run conflict check
    GET/PUT/PATCH/DEL   /api/surgeries/<pk>/    - Retrieve/Update/Delete surgery
"""

from django.urls import path

from hospital_backend.surgeries.views import (
    SummaryView,
    SurgeryConflictCheckView,
    SurgeryDetailView,
    SurgeryListCreateView,
)

app_name = 'surgeries'

urlpatterns = [
    path('', SummaryView.as_view(), name='summary'),
    path('surgeries/', SurgeryListCreateView.as_view(), name='list'),
    path('surgeries/check/', SurgeryConflictCheckView.as_view(), name='check'),
    path('surgeries/<int:pk>/', SurgeryDetailView.as_view(), name='detail'),
]
