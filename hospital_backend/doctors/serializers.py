from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from hospital_backend.core.validators import normalize_tags
from hospital_backend.doctors.models import Doctor
from hospital_backend.surgeries.models import Surgery


class TagListField(serializers.Field):
    """A list of tags, accepted as a JSON list or a comma separated string."""

    default_error_messages = {
        'empty': 'At least one entry is required.',
    }

    def to_internal_value(self, data):
        try:
            tags = normalize_tags(data)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.messages) from None
        if not tags:
            self.fail('empty')
        return tags

    def to_representation(self, value):
        return list(value or [])


class DoctorSurgerySerializer(serializers.ModelSerializer):
    """Compact surgery entry shown on a doctor."""

    patient_name = serializers.CharField(source='patient.name', read_only=True)

    class Meta:
        model = Surgery
        fields = ['id', 'title', 'date', 'active', 'patient', 'patient_name']
        read_only_fields = fields


class DoctorReadSerializer(serializers.ModelSerializer):
    """Read-only serializer with all fields."""

    name = serializers.CharField(read_only=True)
    date_of_birth_formatted = serializers.CharField(read_only=True)

    class Meta:
        model = Doctor
        fields = [
            'id',
            'first_name',
            'family_name',
            'name',
            'date_of_birth',
            'date_of_birth_formatted',
            'expertise',
            'gender',
            'extra_info',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class DoctorDetailSerializer(DoctorReadSerializer):
    """Doctor with the surgeries it is assigned to."""

    surgeries = DoctorSurgerySerializer(many=True, read_only=True)

    class Meta(DoctorReadSerializer.Meta):
        fields = DoctorReadSerializer.Meta.fields + ['surgeries']
        read_only_fields = fields


class DoctorWriteSerializer(serializers.ModelSerializer):
    """Write serializer for create/update operations."""

    expertise = TagListField()
    gender = TagListField()

    class Meta:
        model = Doctor
        fields = [
            'first_name',
            'family_name',
            'date_of_birth',
            'expertise',
            'gender',
            'extra_info',
        ]
