import logging

from django.db import IntegrityError, transaction
from django.db.models import Q
from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from mediconsult_backend.core.exceptions import ConflictError
from mediconsult_backend.core.pagination import PageLimitPagination
from mediconsult_backend.core.utils import log_patient_action
from mediconsult_backend.patients.models import Patient
from mediconsult_backend.patients.permissions import PatientPermission
from mediconsult_backend.patients.serializers import DUPLICATE_PHONE_MESSAGE, PatientSerializer

logger = logging.getLogger(__name__)


class PatientPagination(PageLimitPagination):
    default_limit = 50
    results_key = 'patients'


def _save_unique(serializer, **kwargs):
    """Save, mapping a concurrent (doctor, phone) collision to the same 400."""
    try:
        with transaction.atomic():
            return serializer.save(**kwargs)
    except IntegrityError:
        raise ConflictError(DUPLICATE_PHONE_MESSAGE)


class PatientListCreateView(generics.ListCreateAPIView):
    """List the doctor's patients or create a new one.

    GET  /api/patients/?search=&page=&limit=
    POST /api/patients/
    """

    permission_classes = [PatientPermission]
    serializer_class = PatientSerializer
    pagination_class = PatientPagination

    def get_queryset(self):
        qs = Patient.objects.filter(doctor=self.request.user)
        search = (self.request.query_params.get('search') or '').strip()
        if search:
            qs = qs.filter(
                Q(name__icontains=search)
                | Q(phone__icontains=search)
                | Q(email__icontains=search)
            )
        return qs.order_by('-updated_at', '-id')

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        patient = _save_unique(serializer, doctor=request.user)
        log_patient_action(request.user, 'patient_create', patient_id=patient.id)
        logger.info('Patient created id=%s doctor=%s', patient.id, request.user.id)
        return Response(
            {'message': 'Patient created successfully', 'patient': self.get_serializer(patient).data},
            status=status.HTTP_201_CREATED,
        )


class PatientDetailView(generics.RetrieveUpdateDestroyAPIView):
    """Retrieve, update or delete one of the doctor's patients.

    Prescriptions keep their patient snapshot when the patient is deleted.
    """

    permission_classes = [PatientPermission]
    serializer_class = PatientSerializer

    def get_queryset(self):
        return Patient.objects.filter(doctor=self.request.user)

    def get_object(self):
        try:
            obj = self.get_queryset().get(pk=self.kwargs['pk'])
        except Patient.DoesNotExist:
            raise NotFound('Patient not found')
        self.check_object_permissions(self.request, obj)
        return obj

    def retrieve(self, request, *args, **kwargs):
        patient = self.get_object()
        log_patient_action(request.user, 'patient_view', patient_id=patient.id)
        return Response(self.get_serializer(patient).data)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        patient = _save_unique(serializer)
        log_patient_action(request.user, 'patient_update', patient_id=patient.id)
        return Response({'message': 'Patient updated successfully', 'patient': self.get_serializer(patient).data})

    def destroy(self, request, *args, **kwargs):
        patient = self.get_object()
        patient_id = patient.id
        patient.delete()
        log_patient_action(request.user, 'patient_delete', patient_id=patient_id)
        logger.info('Patient deleted id=%s doctor=%s', patient_id, request.user.id)
        return Response({'message': 'Patient deleted successfully'})
