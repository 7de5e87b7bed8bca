from rest_framework import serializers
from rest_framework.fields import empty
from rest_framework.utils import html

from hospital_backend.doctors.models import Doctor
from hospital_backend.patients.models import Patient
from hospital_backend.surgeries.exceptions import InvalidSchedulingData
from hospital_backend.surgeries.models import Surgery
from hospital_backend.surgeries.services.scheduling import parse_doctor_ids, parse_surgery_date


class SurgeryDateField(serializers.Field):
    """Surgery date: ``YYYY-MM-DD`` or a full ISO timestamp."""

    def to_internal_value(self, data):
        try:
            value = parse_surgery_date(data)
        except InvalidSchedulingData as exc:
            raise serializers.ValidationError(str(exc)) from None
        if value is None:
            if self.allow_null:
                return None
            self.fail('required')
        return value

    def to_representation(self, value):
        return serializers.DateTimeField().to_representation(value)


class DoctorIdsField(serializers.Field):
    """Doctor ids given as one id, a list of ids or a list of ``{"id": ...}``."""

    def get_value(self, dictionary):
        if html.is_html_input(dictionary):
            if self.field_name not in dictionary:
                return empty
            return dictionary.getlist(self.field_name)
        return super().get_value(dictionary)

    def to_internal_value(self, data):
        try:
            return parse_doctor_ids(data)
        except InvalidSchedulingData as exc:
            raise serializers.ValidationError(str(exc)) from None

    def to_representation(self, value):
        return list(value)


class PersonRefSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)


class SurgerySerializer(serializers.ModelSerializer):
    patient = PersonRefSerializer(read_only=True)
    doctors = PersonRefSerializer(many=True, read_only=True)
    date_formatted = serializers.CharField(read_only=True)

    class Meta:
        model = Surgery
        fields = [
            'id',
            'title',
            'date',
            'date_formatted',
            'summary',
            'active',
            'patient',
            'doctors',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class SurgeryWriteSerializer(serializers.Serializer):
    """
    Validates the shape of surgery input.

    Saving is done by ``services.planning`` so the double-booking check runs
    in the same transaction as the write.
    """

    title = serializers.CharField(max_length=255)
    summary = serializers.CharField()
    date = SurgeryDateField()
    patient = serializers.PrimaryKeyRelatedField(queryset=Patient.objects.all())
    doctors = DoctorIdsField()
    active = serializers.BooleanField(default=False)

    def validate_doctors(self, value):
        if not value:
            raise serializers.ValidationError('At least one doctor is required.')
        found = set(Doctor.objects.filter(id__in=value).values_list('id', flat=True))
        missing = [i for i in value if i not in found]
        if missing:
            raise serializers.ValidationError(f'Unknown doctor ids: {missing}')
        return value


class SurgeryConflictCheckSerializer(serializers.Serializer):
    """Candidate for a dry-run conflict check; nothing is saved."""

    id = serializers.IntegerField(required=False, allow_null=True)
    date = SurgeryDateField(required=False, allow_null=True)
    doctors = DoctorIdsField()
    active = serializers.BooleanField(default=True)
