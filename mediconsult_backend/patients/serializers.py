from rest_framework import serializers

from mediconsult_backend.core.exceptions import ConflictError
from mediconsult_backend.patients.models import Patient

DUPLICATE_PHONE_MESSAGE = 'A patient with this phone number already exists'


class PatientSerializer(serializers.ModelSerializer):
    """Patient record in camelCase wire format.

    The owning doctor is never part of the payload; views pass it to save().
    """

    emergencyContact = serializers.CharField(
        source='emergency_contact', max_length=200, required=False, allow_blank=True
    )
    smokingHistory = serializers.CharField(source='smoking_history', required=False, allow_blank=True)
    occupationalExposure = serializers.CharField(
        source='occupational_exposure', required=False, allow_blank=True
    )
    insuranceId = serializers.CharField(source='insurance_id', max_length=100, required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Patient
        fields = [
            'id',
            'name',
            'age',
            'gender',
            'phone',
            'email',
            'address',
            'emergencyContact',
            'allergies',
            'comorbidities',
            'smokingHistory',
            'occupationalExposure',
            'insuranceId',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = ['id', 'createdAt', 'updatedAt']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name is required.')
        return value

    def validate_phone(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Phone is required.')
        return value

    def validate_email(self, value):
        return (value or '').strip().lower()

    def validate(self, attrs):
        phone = attrs.get('phone')
        request = self.context.get('request')
        if phone and request is not None:
            qs = Patient.objects.filter(doctor=request.user, phone=phone)
            if self.instance is not None:
                qs = qs.exclude(pk=self.instance.pk)
            if qs.exists():
                raise ConflictError(DUPLICATE_PHONE_MESSAGE)
        return attrs
