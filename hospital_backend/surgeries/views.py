"""
Surgeries REST views.

All writes go through ``services.planning``; scheduling exceptions are
translated to HTTP 400 here, record-in-use errors to 409 by the project
exception handler.
"""

import logging

from django.utils.dateparse import parse_date
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from hospital_backend.doctors.models import Doctor
from hospital_backend.patients.models import Patient
from hospital_backend.surgeries.exceptions import (
    InvalidSchedulingData,
    SchedulingConflictError,
    SchedulingError,
)
from hospital_backend.surgeries.repositories import SurgeryRepository
from hospital_backend.surgeries.serializers import (
    SurgeryConflictCheckSerializer,
    SurgerySerializer,
    SurgeryWriteSerializer,
)
from hospital_backend.surgeries.services.planning import (
    delete_surgery,
    plan_surgery,
    preview_conflict,
    update_surgery,
)
from hospital_backend.surgeries.services.scheduling import parse_doctor_ids

logger = logging.getLogger(__name__)

TRUE_VALUES = {'1', 'true', 'on', 'yes'}
FALSE_VALUES = {'0', 'false', 'off', 'no'}


def _scheduling_error_response(exc: SchedulingError) -> Response:
    if isinstance(exc, (SchedulingConflictError, InvalidSchedulingData)):
        return Response(exc.to_dict(), status=status.HTTP_400_BAD_REQUEST)
    return Response({'detail': str(exc)}, status=status.HTTP_400_BAD_REQUEST)


def _parse_list_filters(query_params):
    """Read ``date``, ``active`` and ``doctor`` filters from the query string.

    Returns (filters, error_response).
    """
    filters = {}

    raw_date = (query_params.get('date') or '').strip()
    if raw_date:
        try:
            day = parse_date(raw_date)
        except ValueError:
            day = None
        if day is None:
            return None, Response(
                {'detail': 'date must be in format YYYY-MM-DD.', 'field': 'date'},
                status=status.HTTP_400_BAD_REQUEST,
            )
        filters['day'] = day

    raw_active = (query_params.get('active') or '').strip().lower()
    if raw_active in TRUE_VALUES:
        filters['active'] = True
    elif raw_active in FALSE_VALUES:
        filters['active'] = False
    elif raw_active:
        return None, Response(
            {'detail': 'active must be true or false.', 'field': 'active'},
            status=status.HTTP_400_BAD_REQUEST,
        )

    raw_doctors = [v for v in query_params.getlist('doctor') if v != '']
    if raw_doctors:
        try:
            filters['doctor_ids'] = parse_doctor_ids(raw_doctors)
        except InvalidSchedulingData as e:
            return None, Response(e.to_dict(), status=status.HTTP_400_BAD_REQUEST)

    return filters, None


class SummaryView(APIView):
    """Record counts for the landing page."""

    def get(self, request, *args, **kwargs):
        payload = SurgeryRepository.counts()
        payload['doctor_count'] = Doctor.objects.count()
        payload['patient_count'] = Patient.objects.count()
        return Response(payload, status=status.HTTP_200_OK)


class SurgeryListCreateView(generics.ListCreateAPIView):
    """
    List and create surgeries.

    GET filters (each applied only when present):
    - date=YYYY-MM-DD: surgeries on that calendar day
    - active=true|false
    - doctor=<id> (repeatable): surgeries with any of these doctors

    POST runs the double-booking check before saving.
    """

    def get_queryset(self):
        return SurgeryRepository.queryset()

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return SurgeryWriteSerializer
        return SurgerySerializer

    def list(self, request, *args, **kwargs):
        filters, err = _parse_list_filters(request.query_params)
        if err is not None:
            return err
        qs = SurgeryRepository.search(**filters) if filters else self.get_queryset()
        return Response(SurgerySerializer(qs, many=True).data, status=status.HTTP_200_OK)

    def create(self, request, *args, **kwargs):
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)

        try:
            surgery = plan_surgery(data=dict(write_serializer.validated_data))
        except SchedulingError as e:
            return _scheduling_error_response(e)

        read_serializer = SurgerySerializer(surgery, context={'request': request})
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)


class SurgeryDetailView(generics.RetrieveUpdateDestroyAPIView):
    """Retrieve, update (guarded, never clashing with itself) or delete a surgery."""

    def get_queryset(self):
        return SurgeryRepository.queryset()

    def get_serializer_class(self):
        if self.request.method in ('PUT', 'PATCH'):
            return SurgeryWriteSerializer
        return SurgerySerializer

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        obj = self.get_object()
        write_serializer = SurgeryWriteSerializer(data=request.data, partial=partial)
        write_serializer.is_valid(raise_exception=True)

        try:
            updated = update_surgery(obj, data=dict(write_serializer.validated_data), partial=partial)
        except SchedulingError as e:
            return _scheduling_error_response(e)

        read_serializer = SurgerySerializer(updated, context={'request': request})
        return Response(read_serializer.data, status=status.HTTP_200_OK)

    def perform_destroy(self, instance):
        delete_surgery(instance)


class SurgeryConflictCheckView(generics.GenericAPIView):
    """
    Dry-run of the double-booking check.

    Body: {"doctors": [...], "date": "...", "active": true, "id": <surgery to ignore>}
    Response: {"conflict": bool, "message": str, "doctors": [...], "surgery_ids": [...]}
    """

    serializer_class = SurgeryConflictCheckSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = preview_conflict(
            doctors=data['doctors'],
            date=data.get('date'),
            active=data.get('active', True),
            surgery_id=data.get('id'),
        )
        return Response(result.to_dict(), status=status.HTTP_200_OK)
