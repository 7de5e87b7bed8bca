"""Patients App URLs.

Prefix: /api/
Routes:
    GET/POST            /api/patients/       - List/Create patients
    GET/PUT/PATCH/DEL   /api/patients/<pk>/  - Retrieve/Update/Delete patient
"""

from django.urls import path

from hospital_backend.patients.views import (
    PatientDetailView,
    PatientListCreateView,
)

app_name = 'patients'

urlpatterns = [
    path('patients/', PatientListCreateView.as_view(), name='list'),
    path('patients/<int:pk>/', PatientDetailView.as_view(), name='detail'),
]
