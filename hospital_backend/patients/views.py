from django.db.models import Prefetch
from rest_framework import generics
from rest_framework.response import Response

from hospital_backend.core.utils import log_action
from hospital_backend.patients.models import Patient
from hospital_backend.patients.serializers import (
    PatientDetailSerializer,
    PatientReadSerializer,
    PatientWriteSerializer,
)
from hospital_backend.patients.services import delete_patient
from hospital_backend.surgeries.models import Surgery


class PatientListCreateView(generics.ListCreateAPIView):
    """List all patients (by family name) or create a new patient."""

    def get_queryset(self):
        return Patient.objects.order_by('family_name', 'first_name', 'id')

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return PatientWriteSerializer
        return PatientReadSerializer

    def perform_create(self, serializer):
        obj = serializer.save()
        log_action('patient_create', 'patient', obj.id, meta={'name': obj.name})


class PatientDetailView(generics.RetrieveUpdateDestroyAPIView):
    """Retrieve, update or delete a patient.

    DELETE answers 409 while the patient has surgeries.
    """

    def get_queryset(self):
        return Patient.objects.prefetch_related(
            Prefetch('surgeries', queryset=Surgery.objects.prefetch_related('doctors').order_by('date', 'id'))
        )

    def get_serializer_class(self):
        if self.request.method in ['PUT', 'PATCH']:
            return PatientWriteSerializer
        return PatientDetailSerializer

    def update(self, request, *args, **kwargs):
        super().update(request, *args, **kwargs)
        instance = self.get_object()
        return Response(PatientDetailSerializer(instance, context=self.get_serializer_context()).data)

    def perform_update(self, serializer):
        obj = serializer.save()
        log_action('patient_update', 'patient', obj.id, meta={'name': obj.name})

    def perform_destroy(self, instance):
        delete_patient(instance)
