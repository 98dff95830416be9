"""Serializers for prescriptions.

The write side validates each clinical section with a nested serializer and
stores the cleaned documents as JSON; the read side exposes them unchanged in
camelCase together with the issuing doctor.
"""

from collections.abc import Mapping

from django.db import transaction
from rest_framework import serializers

from mediconsult_backend.core.serializers import DoctorSummarySerializer
from mediconsult_backend.patients.models import Patient
from mediconsult_backend.prescriptions import services
from mediconsult_backend.prescriptions.models import Prescription, SavedSymptom

SECTIONS = ('patient', 'diagnosis', 'lifestyle', 'vitals', 'tests', 'medications')
SECTIONS_REQUIRED_MESSAGE = (
    'All prescription sections are required (patient, diagnosis, lifestyle, vitals, tests, medications)'
)


def _optional_text(**kwargs):
    return serializers.CharField(required=False, allow_blank=True, default='', **kwargs)


def _text_list():
    return serializers.ListField(
        child=serializers.CharField(allow_blank=False, trim_whitespace=True),
        required=False,
        default=list,
    )


# -----------------------------------------------------------------------------
# Section serializers
# -----------------------------------------------------------------------------


class PatientSnapshotSerializer(serializers.Serializer):
    """Patient demographics as submitted; absent optional keys stay absent."""

    id = serializers.IntegerField(required=False, allow_null=True)
    name = serializers.CharField(max_length=200)
    age = serializers.IntegerField(min_value=0, max_value=150)
    gender = serializers.ChoiceField(choices=Patient.GENDER_CHOICES)
    phone = serializers.CharField(max_length=50)
    email = serializers.EmailField(required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    emergencyContact = serializers.CharField(required=False, allow_blank=True, max_length=200)


class DiagnosisEntrySerializer(serializers.Serializer):
    primaryDiagnosis = serializers.CharField(max_length=255)
    secondaryDiagnosis = _optional_text(max_length=255)
    symptoms = _text_list()
    duration = _optional_text(max_length=100)
    severity = serializers.ChoiceField(choices=Prescription.SEVERITY_CHOICES)
    notes = _optional_text()


class LifestyleSerializer(serializers.Serializer):
    dietaryAdvice = _text_list()
    exerciseRecommendations = _text_list()
    lifestyleModifications = _text_list()
    followUpInstructions = _optional_text()


class VitalsSerializer(serializers.Serializer):
    bloodPressure = _optional_text(max_length=50)
    temperature = _optional_text(max_length=50)
    heartRate = _optional_text(max_length=50)
    weight = _optional_text(max_length=50)
    height = _optional_text(max_length=50)
    bmi = _optional_text(max_length=50)
    oxygenSaturation = _optional_text(max_length=50)
    respiratoryRate = _optional_text(max_length=50)


class TestsSerializer(serializers.Serializer):
    orderedTests = _text_list()
    labResults = _text_list()
    imagingResults = _text_list()
    testNotes = _optional_text()


class MedicationSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    dosage = serializers.CharField(max_length=100)
    frequency = serializers.CharField(max_length=100)
    duration = serializers.CharField(max_length=100)
    route = _optional_text(max_length=100)
    instructions = _optional_text()
    notes = _optional_text()


# -----------------------------------------------------------------------------
# Prescription
# -----------------------------------------------------------------------------


class PrescriptionWriteSerializer(serializers.Serializer):
    """Create or wholesale-replace a prescription.

    Expects ``context['request']``; the requesting user owns the prescription
    and ``patient.id``, when given, must name one of their patients.
    """

    patient = PatientSnapshotSerializer()
    diagnosis = DiagnosisEntrySerializer(many=True)
    lifestyle = LifestyleSerializer()
    vitals = VitalsSerializer()
    tests = TestsSerializer()
    medications = MedicationSerializer(many=True)
    notes = _optional_text()
    dateIssued = serializers.DateTimeField(source='date_issued', required=False)

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            if any(data.get(section) in (None, '') for section in SECTIONS):
                raise serializers.ValidationError({'message': SECTIONS_REQUIRED_MESSAGE})
            if data['diagnosis'] == []:
                raise serializers.ValidationError({'message': 'At least one diagnosis is required'})
            if data['medications'] == []:
                raise serializers.ValidationError({'message': 'At least one medication is required'})
        return super().to_internal_value(data)

    def validate_patient(self, value):
        patient_id = value.get('id')
        if patient_id is not None:
            doctor = self.context['request'].user
            if not Patient.objects.filter(pk=patient_id, doctor=doctor).exists():
                raise serializers.ValidationError('Patient not found')
        return value

    def _apply(self, instance, validated_data):
        snapshot = dict(validated_data['patient'])
        instance.patient_id = snapshot.get('id')
        instance.patient_snapshot = snapshot
        instance.diagnosis = [dict(entry) for entry in validated_data['diagnosis']]
        instance.lifestyle = dict(validated_data['lifestyle'])
        instance.vitals = dict(validated_data['vitals'])
        instance.tests = dict(validated_data['tests'])
        instance.medications = [dict(med) for med in validated_data['medications']]
        instance.notes = validated_data.get('notes', '')
        if 'date_issued' in validated_data:
            instance.date_issued = validated_data['date_issued']
        return instance

    def create(self, validated_data):
        with transaction.atomic():
            prescription = self._apply(Prescription(doctor=self.context['request'].user), validated_data)
            prescription.prescription_number = services.next_prescription_number()
            prescription.save()
        return prescription

    def update(self, instance, validated_data):
        self._apply(instance, validated_data)
        instance.save()
        return instance


class PrescriptionSerializer(serializers.ModelSerializer):
    """Read representation with the issuing doctor joined in."""

    prescriptionNumber = serializers.CharField(source='prescription_number', read_only=True)
    doctor = DoctorSummarySerializer(read_only=True)
    patientId = serializers.IntegerField(source='patient_id', read_only=True)
    patient = serializers.JSONField(source='patient_snapshot', read_only=True)
    dateIssued = serializers.DateTimeField(source='date_issued', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Prescription
        fields = [
            'id',
            'prescriptionNumber',
            'doctor',
            'patientId',
            'patient',
            'diagnosis',
            'lifestyle',
            'vitals',
            'tests',
            'medications',
            'notes',
            'dateIssued',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields


# -----------------------------------------------------------------------------
# Saved symptoms
# -----------------------------------------------------------------------------


class SavedSymptomInputSerializer(serializers.Serializer):
    symptom = serializers.CharField(max_length=200)

    def to_internal_value(self, data):
        symptom = data.get('symptom') if isinstance(data, Mapping) else None
        if not isinstance(symptom, str) or not symptom.strip() or len(symptom.strip()) > 200:
            raise serializers.ValidationError({'message': 'Invalid symptom'})
        return {'symptom': symptom.strip()}


class SavedSymptomSerializer(serializers.ModelSerializer):
    lastUsed = serializers.DateTimeField(source='last_used', read_only=True)

    class Meta:
        model = SavedSymptom
        fields = ['id', 'symptom', 'count', 'lastUsed']
        read_only_fields = fields
