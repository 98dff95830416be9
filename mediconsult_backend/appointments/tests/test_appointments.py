from __future__ import annotations

from datetime import date, time

from django.test import TestCase

from rest_framework.test import APIClient

from mediconsult_backend.appointments.models import Appointment
from mediconsult_backend.core.models import Role, User


class AppointmentAPITest(TestCase):
	"""Tests for /api/appointments/ endpoints."""

	def setUp(self):
		role_doctor = Role.get_by_name(Role.DOCTOR)
		self.doctor = User.objects.create_user(
			email="doctor_appt@example.com",
			password="DummyPass123!",
			name="Dr. Appt",
			role=role_doctor,
			is_email_verified=True,
		)
		self.other_doctor = User.objects.create_user(
			email="other_appt@example.com",
			password="DummyPass123!",
			name="Dr. Other",
			role=role_doctor,
			is_email_verified=True,
		)
		self.client = self._client_for(self.doctor)

	def _client_for(self, user: User) -> APIClient:
		client = APIClient()
		client.defaults["HTTP_HOST"] = "localhost"
		client.force_authenticate(user=user)
		return client

	def _make(self, doctor=None, **kwargs):
		values = {
			"patient_name": "Ravi Kumar",
			"doctor_name": "Dr. Appt",
			"date": date(2026, 3, 10),
			"time": time(10, 30),
		}
		values.update(kwargs)
		return Appointment.objects.create(doctor=doctor or self.doctor, **values)

	# ========== CREATE ==========

	def test_create_defaults_to_scheduled(self):
		response = self.client.post(
			"/api/appointments/",
			{"patientName": "Ravi Kumar", "doctorName": "Dr. Appt", "date": "2026-03-10", "time": "10:30"},
			format="json",
		)

		self.assertEqual(response.status_code, 201)
		appt = response.data["appointment"]
		self.assertEqual(appt["status"], "scheduled")
		self.assertEqual(appt["date"], "2026-03-10")
		self.assertEqual(appt["time"], "10:30")
		self.assertEqual(Appointment.objects.get(pk=appt["id"]).doctor, self.doctor)

	def test_create_missing_fields(self):
		for missing in ("patientName", "doctorName", "date", "time"):
			with self.subTest(missing=missing):
				payload = {"patientName": "A", "doctorName": "B", "date": "2026-03-10", "time": "09:00"}
				payload.pop(missing)

				response = self.client.post("/api/appointments/", payload, format="json")

				self.assertEqual(response.status_code, 400)
				self.assertEqual(response.data["message"], "Required fields missing")
		self.assertEqual(Appointment.objects.count(), 0)

	def test_create_invalid_status(self):
		response = self.client.post(
			"/api/appointments/",
			{"patientName": "A", "doctorName": "B", "date": "2026-03-10", "time": "09:00", "status": "confirmed"},
			format="json",
		)

		self.assertEqual(response.status_code, 400)
		self.assertIn("status", response.data["errors"])

	# ========== LIST ==========

	def test_list_orders_by_date_desc_then_time_asc(self):
		self._make(patient_name="Early", date=date(2026, 3, 10), time=time(9, 0))
		self._make(patient_name="Late", date=date(2026, 3, 10), time=time(15, 0))
		self._make(patient_name="Next day", date=date(2026, 3, 11), time=time(12, 0))
		self._make(doctor=self.other_doctor, patient_name="Hidden")

		response = self.client.get("/api/appointments/")

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data["total"], 3)
		self.assertEqual(
			[a["patientName"] for a in response.data["appointments"]],
			["Next day", "Early", "Late"],
		)

	def test_list_search(self):
		self._make(patient_name="Meera Nair", doctor_name="Dr. Rao")
		self._make(patient_name="Arjun Das", doctor_name="Dr. Iyer")

		by_patient = self.client.get("/api/appointments/", {"search": "meera"})
		by_doctor = self.client.get("/api/appointments/", {"search": "IYER"})

		self.assertEqual([a["patientName"] for a in by_patient.data["appointments"]], ["Meera Nair"])
		self.assertEqual([a["patientName"] for a in by_doctor.data["appointments"]], ["Arjun Das"])

	# ========== DETAIL / UPDATE / DELETE ==========

	def test_retrieve(self):
		appt = self._make()

		response = self.client.get(f"/api/appointments/{appt.id}/")

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data["appointment"]["patientName"], "Ravi Kumar")

	def test_put_is_partial_and_allows_any_status_change(self):
		appt = self._make(status=Appointment.STATUS_CANCELLED)

		response = self.client.put(f"/api/appointments/{appt.id}/", {"status": "completed"}, format="json")

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data["appointment"]["status"], "completed")
		appt.refresh_from_db()
		self.assertEqual(appt.status, "completed")
		self.assertEqual(appt.patient_name, "Ravi Kumar")

	def test_patch_reschedule(self):
		appt = self._make()

		response = self.client.patch(
			f"/api/appointments/{appt.id}/", {"date": "2026-04-01", "time": "16:45"}, format="json"
		)

		self.assertEqual(response.status_code, 200)
		appt.refresh_from_db()
		self.assertEqual(appt.date, date(2026, 4, 1))
		self.assertEqual(appt.time, time(16, 45))

	def test_delete(self):
		appt = self._make()

		response = self.client.delete(f"/api/appointments/{appt.id}/")

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data["message"], "Appointment deleted")
		self.assertFalse(Appointment.objects.filter(pk=appt.pk).exists())

	def test_other_doctor_gets_not_found(self):
		appt = self._make()
		other = self._client_for(self.other_doctor)

		get_response = other.get(f"/api/appointments/{appt.id}/")
		put_response = other.put(f"/api/appointments/{appt.id}/", {"status": "cancelled"}, format="json")
		delete_response = other.delete(f"/api/appointments/{appt.id}/")

		for response in (get_response, put_response, delete_response):
			self.assertEqual(response.status_code, 404)
			self.assertEqual(response.data["message"], "Appointment not found")
		appt.refresh_from_db()
		self.assertEqual(appt.status, "scheduled")

	def test_unknown_id_not_found(self):
		response = self.client.get("/api/appointments/999999/")

		self.assertEqual(response.status_code, 404)

	def test_booking_then_completing_workflow(self):
		created = self.client.post(
			"/api/appointments/",
			{"patientName": "Leela Menon", "doctorName": "Dr. Appt", "date": "2026-05-02", "time": "11:00"},
			format="json",
		)
		appt_id = created.data["appointment"]["id"]

		self.client.put(f"/api/appointments/{appt_id}/", {"status": "completed"}, format="json")
		listing = self.client.get("/api/appointments/", {"search": "leela"})

		self.assertEqual(listing.data["appointments"][0]["status"], "completed")
