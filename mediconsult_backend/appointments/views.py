import logging

from django.db.models import Q
from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from mediconsult_backend.appointments.models import Appointment
from mediconsult_backend.appointments.permissions import AppointmentPermission
from mediconsult_backend.appointments.serializers import AppointmentSerializer
from mediconsult_backend.core.utils import log_patient_action

logger = logging.getLogger(__name__)


class AppointmentListCreateView(generics.ListCreateAPIView):
	"""List and create the doctor's appointments.

	GET  /api/appointments/?search=   -> {"appointments": [...], "total": n}
	POST /api/appointments/           -> 201 {"appointment": {...}}
	"""
	permission_classes = [AppointmentPermission]
	serializer_class = AppointmentSerializer
	pagination_class = None

	def get_queryset(self):
		qs = Appointment.objects.filter(doctor=self.request.user)
		search = (self.request.query_params.get('search') or '').strip()
		if search:
			qs = qs.filter(Q(patient_name__icontains=search) | Q(doctor_name__icontains=search))
		return qs.order_by('-date', 'time', '-id')

	def list(self, request, *args, **kwargs):
		data = self.get_serializer(self.get_queryset(), many=True).data
		log_patient_action(request.user, 'appointment_list')
		return Response({'appointments': data, 'total': len(data)})

	def create(self, request, *args, **kwargs):
		serializer = self.get_serializer(data=request.data)
		serializer.is_valid(raise_exception=True)
		appointment = serializer.save(doctor=request.user)
		log_patient_action(request.user, 'appointment_create', meta={'appointment_id': appointment.id})
		logger.info('Appointment created id=%s doctor=%s', appointment.id, request.user.id)
		return Response({'appointment': self.get_serializer(appointment).data}, status=status.HTTP_201_CREATED)


class AppointmentDetailView(generics.RetrieveUpdateDestroyAPIView):
	"""Retrieve, update (PUT and PATCH are both partial) or delete an appointment."""
	permission_classes = [AppointmentPermission]
	serializer_class = AppointmentSerializer

	def get_queryset(self):
		return Appointment.objects.filter(doctor=self.request.user)

	def get_object(self):
		try:
			obj = self.get_queryset().get(pk=self.kwargs['pk'])
		except Appointment.DoesNotExist:
			raise NotFound('Appointment not found')
		self.check_object_permissions(self.request, obj)
		return obj

	def retrieve(self, request, *args, **kwargs):
		return Response({'appointment': self.get_serializer(self.get_object()).data})

	def update(self, request, *args, **kwargs):
		serializer = self.get_serializer(self.get_object(), data=request.data, partial=True)
		serializer.is_valid(raise_exception=True)
		appointment = serializer.save()
		log_patient_action(
			request.user,
			'appointment_update',
			meta={'appointment_id': appointment.id, 'status': appointment.status},
		)
		return Response({'appointment': self.get_serializer(appointment).data})

	def destroy(self, request, *args, **kwargs):
		appointment = self.get_object()
		appointment_id = appointment.id
		appointment.delete()
		log_patient_action(request.user, 'appointment_delete', meta={'appointment_id': appointment_id})
		return Response({'message': 'Appointment deleted'})
