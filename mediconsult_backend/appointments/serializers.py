from collections.abc import Mapping

from rest_framework import serializers

from mediconsult_backend.appointments.models import Appointment

REQUIRED_FIELDS = ('patientName', 'doctorName', 'date', 'time')


class AppointmentSerializer(serializers.ModelSerializer):
    """Appointment in camelCase; ``time`` is exchanged as HH:MM.

    On create all of patientName, doctorName, date and time must be present;
    updates may send any subset.
    """

    patientName = serializers.CharField(source='patient_name', max_length=200)
    doctorName = serializers.CharField(source='doctor_name', max_length=200)
    time = serializers.TimeField(format='%H:%M', input_formats=['%H:%M', '%H:%M:%S'])
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Appointment
        fields = [
            'id',
            'patientName',
            'doctorName',
            'date',
            'time',
            'status',
            'notes',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id', 'createdAt', 'updatedAt']
        extra_kwargs = {
            'notes': {'required': False, 'allow_blank': True},
        }

    def to_internal_value(self, data):
        if self.instance is None and isinstance(data, Mapping):
            if any(not data.get(field) for field in REQUIRED_FIELDS):
                raise serializers.ValidationError({'message': 'Required fields missing'})
        return super().to_internal_value(data)
