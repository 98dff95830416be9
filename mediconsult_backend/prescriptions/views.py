import logging
import re

from django.db.models import Q
from rest_framework import generics, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from mediconsult_backend.core.pagination import PageLimitPagination
from mediconsult_backend.core.utils import log_patient_action
from mediconsult_backend.prescriptions import services
from mediconsult_backend.prescriptions.models import Prescription
from mediconsult_backend.prescriptions.permissions import PrescriptionPermission
from mediconsult_backend.prescriptions.serializers import (
    PrescriptionSerializer,
    PrescriptionWriteSerializer,
    SavedSymptomInputSerializer,
    SavedSymptomSerializer,
)

logger = logging.getLogger(__name__)


class PrescriptionPagination(PageLimitPagination):
    results_key = 'prescriptions'
    page_key = 'currentPage'


class PrescriptionListCreateView(generics.ListCreateAPIView):
    """List the doctor's prescriptions or issue a new one.

    GET  /api/prescriptions/?search=&patientId=&page=&limit=
    POST /api/prescriptions/
    """

    permission_classes = [PrescriptionPermission]
    pagination_class = PrescriptionPagination

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return PrescriptionWriteSerializer
        return PrescriptionSerializer

    def get_queryset(self):
        qs = Prescription.objects.filter(doctor=self.request.user).select_related('doctor')

        patient_id = self.request.query_params.get('patientId')
        if patient_id:
            if not re.fullmatch(r'[0-9]+', patient_id):
                raise ValidationError({'message': 'Invalid patientId'})
            qs = qs.filter(patient_id=int(patient_id))

        search = (self.request.query_params.get('search') or '').strip()
        if search:
            qs = qs.filter(
                Q(prescription_number__icontains=search)
                | Q(patient_name__icontains=search)
                | Q(diagnosis_text__icontains=search)
            )
        return qs.order_by('-date_issued', '-id')

    def create(self, request, *args, **kwargs):
        serializer = PrescriptionWriteSerializer(data=request.data, context=self.get_serializer_context())
        serializer.is_valid(raise_exception=True)
        prescription = serializer.save()
        log_patient_action(
            request.user,
            'prescription_create',
            patient_id=prescription.patient_id,
            meta={'prescription_number': prescription.prescription_number},
        )
        logger.info('Prescription %s issued by doctor=%s', prescription.prescription_number, request.user.id)
        return Response(
            {
                'message': 'Prescription created successfully',
                'prescription': PrescriptionSerializer(prescription).data,
            },
            status=status.HTTP_201_CREATED,
        )


class PrescriptionDetailView(generics.RetrieveUpdateDestroyAPIView):
    """Retrieve, replace or delete one of the doctor's prescriptions."""

    permission_classes = [PrescriptionPermission]
    serializer_class = PrescriptionSerializer
    http_method_names = ['get', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        return Prescription.objects.filter(doctor=self.request.user).select_related('doctor')

    def get_object(self):
        try:
            obj = self.get_queryset().get(pk=self.kwargs['pk'])
        except Prescription.DoesNotExist:
            raise NotFound('Prescription not found')
        self.check_object_permissions(self.request, obj)
        return obj

    def retrieve(self, request, *args, **kwargs):
        prescription = self.get_object()
        log_patient_action(
            request.user,
            'prescription_view',
            patient_id=prescription.patient_id,
            meta={'prescription_number': prescription.prescription_number},
        )
        return Response({'prescription': PrescriptionSerializer(prescription).data})

    def update(self, request, *args, **kwargs):
        prescription = self.get_object()
        serializer = PrescriptionWriteSerializer(
            prescription, data=request.data, context=self.get_serializer_context()
        )
        serializer.is_valid(raise_exception=True)
        prescription = serializer.save()
        log_patient_action(
            request.user,
            'prescription_update',
            patient_id=prescription.patient_id,
            meta={'prescription_number': prescription.prescription_number},
        )
        return Response(
            {
                'message': 'Prescription updated successfully',
                'prescription': PrescriptionSerializer(prescription).data,
            }
        )

    def destroy(self, request, *args, **kwargs):
        prescription = self.get_object()
        number, patient_id = prescription.prescription_number, prescription.patient_id
        prescription.delete()
        log_patient_action(
            request.user,
            'prescription_delete',
            patient_id=patient_id,
            meta={'prescription_number': number},
        )
        return Response({'message': 'Prescription deleted successfully'})


# -----------------------------------------------------------------------------
# Saved suggestions
# -----------------------------------------------------------------------------


class SavedSuggestionView(APIView):
    """Ranked suggestion list computed from the doctor's prescriptions."""

    permission_classes = [PrescriptionPermission]
    response_key: str = ''

    def compute(self, doctor):
        raise NotImplementedError

    def get(self, request, *args, **kwargs):
        return Response({self.response_key: self.compute(request.user)})


class SavedDiagnosesView(SavedSuggestionView):
    response_key = 'diagnoses'

    def compute(self, doctor):
        return services.saved_diagnoses(doctor)


class SavedSymptomsView(SavedSuggestionView):
    """GET ranks symptoms from prescriptions; POST records an explicit save."""

    response_key = 'symptoms'

    def compute(self, doctor):
        return services.saved_symptoms(doctor)

    def post(self, request, *args, **kwargs):
        serializer = SavedSymptomInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        saved = services.record_saved_symptom(request.user, serializer.validated_data['symptom'])
        return Response({'message': 'Saved symptom updated', 'symptom': SavedSymptomSerializer(saved).data})


class SavedTestsView(SavedSuggestionView):
    response_key = 'tests'

    def compute(self, doctor):
        return services.saved_tests(doctor)


class SavedMedicinesView(SavedSuggestionView):
    response_key = 'medicines'

    def compute(self, doctor):
        return services.saved_medicines(doctor)
