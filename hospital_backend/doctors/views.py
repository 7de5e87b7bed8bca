from django.db.models import Prefetch
from rest_framework import generics
from rest_framework.response import Response

from hospital_backend.core.utils import log_action
from hospital_backend.doctors.models import Doctor
from hospital_backend.doctors.serializers import (
    DoctorDetailSerializer,
    DoctorReadSerializer,
    DoctorWriteSerializer,
)
from hospital_backend.doctors.services import delete_doctor
from hospital_backend.surgeries.models import Surgery
from hospital_backend.surgeries.services.planning import list_available_doctors


class DoctorListCreateView(generics.ListCreateAPIView):
    """List all doctors or create a new doctor."""

    def get_queryset(self):
        return Doctor.objects.all()

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return DoctorWriteSerializer
        return DoctorReadSerializer

    def perform_create(self, serializer):
        obj = serializer.save()
        log_action('doctor_create', 'doctor', obj.id, meta={'name': obj.name})


class DoctorDetailView(generics.RetrieveUpdateDestroyAPIView):
    """Retrieve, update or delete a doctor.

    DELETE answers 409 while the doctor is assigned to a surgery.
    """

    def get_queryset(self):
        return Doctor.objects.prefetch_related(
            Prefetch('surgeries', queryset=Surgery.objects.select_related('patient').order_by('date', 'id'))
        )

    def get_serializer_class(self):
        if self.request.method in ['PUT', 'PATCH']:
            return DoctorWriteSerializer
        return DoctorDetailSerializer

    def update(self, request, *args, **kwargs):
        super().update(request, *args, **kwargs)
        instance = self.get_object()
        return Response(DoctorDetailSerializer(instance, context=self.get_serializer_context()).data)

    def perform_update(self, serializer):
        obj = serializer.save()
        log_action('doctor_update', 'doctor', obj.id, meta={'name': obj.name})

    def perform_destroy(self, instance):
        delete_doctor(instance)


class AvailableDoctorListView(generics.ListAPIView):
    """Doctors not assigned to any active surgery."""

    serializer_class = DoctorReadSerializer
    pagination_class = None

    def get_queryset(self):
        return list_available_doctors()
