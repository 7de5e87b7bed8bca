from rest_framework import serializers

from hospital_backend.patients.models import Patient
from hospital_backend.surgeries.models import Surgery


class PatientSurgerySerializer(serializers.ModelSerializer):
    """Compact surgery entry shown on a patient."""

    doctor_names = serializers.SerializerMethodField()

    class Meta:
        model = Surgery
        fields = ['id', 'title', 'date', 'active', 'doctor_names']
        read_only_fields = fields

    def get_doctor_names(self, obj):
        return [d.name for d in obj.doctors.all()]


class PatientReadSerializer(serializers.ModelSerializer):
    """Read-only serializer with all fields."""

    name = serializers.CharField(read_only=True)
    lifespan = serializers.CharField(read_only=True)

    class Meta:
        model = Patient
        fields = [
            'id',
            'first_name',
            'family_name',
            'name',
            'date_of_birth',
            'date_of_death',
            'lifespan',
            'diagnosis',
            'treatment',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PatientDetailSerializer(PatientReadSerializer):
    """Patient with its surgeries."""

    surgeries = PatientSurgerySerializer(many=True, read_only=True)

    class Meta(PatientReadSerializer.Meta):
        fields = PatientReadSerializer.Meta.fields + ['surgeries']
        read_only_fields = fields


class PatientWriteSerializer(serializers.ModelSerializer):
    """Write serializer for create/update operations."""

    class Meta:
        model = Patient
        fields = [
            'first_name',
            'family_name',
            'date_of_birth',
            'date_of_death',
            'diagnosis',
            'treatment',
        ]

    def validate(self, attrs):
        instance = getattr(self, 'instance', None)
        born = attrs.get('date_of_birth', getattr(instance, 'date_of_birth', None))
        died = attrs.get('date_of_death', getattr(instance, 'date_of_death', None))
        if born and died and died < born:
            raise serializers.ValidationError(
                {'date_of_death': 'Date of death must not be before date of birth.'}
            )
        return attrs
