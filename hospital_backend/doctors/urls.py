"""Doctors App URLs.

Prefix: /api/
Routes:
    GET/POST            /api/doctors/            - List/Create doctors
    GET                 /api/doctors/available/  - Doctors free of active surgeries
    GET/PUT/PATCH/DEL   /api/doctors/<pk>/       - Retrieve/Update/Delete doctor
"""

from django.urls import path

from hospital_backend.doctors.views import (
    AvailableDoctorListView,
    DoctorDetailView,
    DoctorListCreateView,
)

app_name = 'doctors'

urlpatterns = [
    path('doctors/', DoctorListCreateView.as_view(), name='list'),
    path('doctors/available/', AvailableDoctorListView.as_view(), name='available'),
    path('doctors/<int:pk>/', DoctorDetailView.as_view(), name='detail'),
]
