from __future__ import annotations

from unittest.mock import patch

from django.db import IntegrityError
from django.test import TestCase

from rest_framework.test import APIClient

from mediconsult_backend.core.models import AuditLog, Role, User
from mediconsult_backend.patients.models import Patient


def make_doctor(email: str, role_name: str = Role.DOCTOR) -> User:
    return User.objects.create_user(
        email=email,
        password="DummyPass123!",
        name=email.split("@")[0],
        role=Role.get_by_name(role_name),
        is_email_verified=True,
    )


PATIENT_PAYLOAD = {
    "name": "Ravi Kumar",
    "age": 54,
    "gender": "male",
    "phone": "9000000001",
    "email": "Ravi.Kumar@Example.com",
    "address": "12 MG Road",
    "emergencyContact": "Sita Kumar 9000000002",
    "allergies": "Penicillin",
    "comorbidities": "Type 2 diabetes",
    "smokingHistory": "20 pack-years, quit 2015",
    "occupationalExposure": "Coal mining",
    "insuranceId": "INS-778",
}


class PatientAPITest(TestCase):
    """Tests for /api/patients/ endpoints.

    RBAC: doctor, admin = full access to their own patients only.
    """

    def setUp(self):
        self.doctor = make_doctor("doctor_patient@example.com")
        self.other_doctor = make_doctor("other_patient@example.com")
        self.admin = make_doctor("admin_patient@example.com", Role.ADMIN)
        self.no_role = User.objects.create_user(
            email="norole_patient@example.com",
            password="DummyPass123!",
            name="No Role",
        )

        self.patient = Patient.objects.create(
            doctor=self.doctor,
            name="Meera Nair",
            age=61,
            gender="female",
            phone="9111111111",
            email="meera@example.com",
        )

    def _client_for(self, user: User) -> APIClient:
        client = APIClient()
        client.defaults["HTTP_HOST"] = "localhost"
        client.force_authenticate(user=user)
        return client

    # ========== LIST TESTS ==========

    def test_list_returns_envelope(self):
        response = self._client_for(self.doctor).get("/api/patients/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["total"], 1)
        self.assertEqual(response.data["page"], 1)
        self.assertEqual(response.data["totalPages"], 1)
        self.assertEqual(response.data["patients"][0]["name"], "Meera Nair")

    def test_list_only_shows_own_patients(self):
        Patient.objects.create(doctor=self.other_doctor, name="Someone Else", age=30, gender="other", phone="1")

        response = self._client_for(self.doctor).get("/api/patients/")

        self.assertEqual([p["name"] for p in response.data["patients"]], ["Meera Nair"])

    def test_list_search_is_case_insensitive(self):
        Patient.objects.create(doctor=self.doctor, name="Arjun Das", age=40, gender="male", phone="9222222222")
        client = self._client_for(self.doctor)

        by_name = client.get("/api/patients/", {"search": "MEERA"})
        by_phone = client.get("/api/patients/", {"search": "92222"})
        by_email = client.get("/api/patients/", {"search": "meera@"})

        self.assertEqual([p["name"] for p in by_name.data["patients"]], ["Meera Nair"])
        self.assertEqual([p["name"] for p in by_phone.data["patients"]], ["Arjun Das"])
        self.assertEqual(by_email.data["total"], 1)

    def test_list_pagination(self):
        for i in range(4):
            Patient.objects.create(doctor=self.doctor, name=f"P{i}", age=20 + i, gender="other", phone=f"800{i}")

        response = self._client_for(self.doctor).get("/api/patients/", {"page": 2, "limit": 2})

        self.assertEqual(response.data["total"], 5)
        self.assertEqual(response.data["page"], 2)
        self.assertEqual(response.data["totalPages"], 3)
        self.assertEqual(len(response.data["patients"]), 2)

    def test_list_unauthenticated_returns_401(self):
        client = APIClient()
        client.defaults["HTTP_HOST"] = "localhost"

        response = client.get("/api/patients/")

        self.assertEqual(response.status_code, 401)

    def test_list_without_role_forbidden(self):
        response = self._client_for(self.no_role).get("/api/patients/")

        self.assertEqual(response.status_code, 403)

    # ========== CREATE TESTS ==========

    @patch("mediconsult_backend.patients.views.log_patient_action")
    def test_create_as_doctor_success(self, mock_log):
        response = self._client_for(self.doctor).post("/api/patients/", PATIENT_PAYLOAD, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["message"], "Patient created successfully")
        self.assertEqual(response.data["patient"]["email"], "ravi.kumar@example.com")
        self.assertEqual(response.data["patient"]["smokingHistory"], "20 pack-years, quit 2015")
        created = Patient.objects.get(pk=response.data["patient"]["id"])
        self.assertEqual(created.doctor, self.doctor)
        mock_log.assert_called_once_with(self.doctor, "patient_create", patient_id=created.id)

    def test_create_writes_audit_log(self):
        self._client_for(self.admin).post("/api/patients/", PATIENT_PAYLOAD, format="json")

        self.assertTrue(AuditLog.objects.filter(action="patient_create", role_name="admin").exists())

    def test_create_duplicate_phone_same_doctor_rejected(self):
        payload = {**PATIENT_PAYLOAD, "phone": self.patient.phone}

        response = self._client_for(self.doctor).post("/api/patients/", payload, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "A patient with this phone number already exists")
        self.assertEqual(Patient.objects.filter(doctor=self.doctor).count(), 1)

    def test_create_same_phone_other_doctor_allowed(self):
        payload = {**PATIENT_PAYLOAD, "phone": self.patient.phone}

        response = self._client_for(self.other_doctor).post("/api/patients/", payload, format="json")

        self.assertEqual(response.status_code, 201)

    def test_create_constraint_violation_maps_to_400(self):
        with patch(
            "mediconsult_backend.patients.serializers.PatientSerializer.save",
            side_effect=IntegrityError("UNIQUE constraint failed"),
        ):
            response = self._client_for(self.doctor).post("/api/patients/", PATIENT_PAYLOAD, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "A patient with this phone number already exists")

    def test_create_invalid_age_and_gender(self):
        payload = {**PATIENT_PAYLOAD, "age": 151, "gender": "unknown"}

        response = self._client_for(self.doctor).post("/api/patients/", payload, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("age", response.data["errors"])
        self.assertIn("gender", response.data["errors"])

    def test_create_invalid_email(self):
        payload = {**PATIENT_PAYLOAD, "email": "not-an-email"}

        response = self._client_for(self.doctor).post("/api/patients/", payload, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertIn("email", response.data["errors"])

    # ========== RETRIEVE / UPDATE / DELETE TESTS ==========

    def test_retrieve_returns_patient_object(self):
        response = self._client_for(self.doctor).get(f"/api/patients/{self.patient.pk}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["id"], self.patient.pk)
        self.assertEqual(response.data["phone"], "9111111111")

    def test_retrieve_other_doctors_patient_not_found(self):
        response = self._client_for(self.other_doctor).get(f"/api/patients/{self.patient.pk}/")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["message"], "Patient not found")

    def test_update_full(self):
        payload = {**PATIENT_PAYLOAD, "phone": self.patient.phone, "name": "Meera N."}

        response = self._client_for(self.doctor).put(f"/api/patients/{self.patient.pk}/", payload, format="json")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["message"], "Patient updated successfully")
        self.patient.refresh_from_db()
        self.assertEqual(self.patient.name, "Meera N.")

    def test_partial_update(self):
        response = self._client_for(self.doctor).patch(
            f"/api/patients/{self.patient.pk}/", {"age": 62}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["patient"]["age"], 62)

    def test_update_to_existing_phone_rejected(self):
        other = Patient.objects.create(doctor=self.doctor, name="Arjun", age=40, gender="male", phone="9333")

        response = self._client_for(self.doctor).patch(
            f"/api/patients/{other.pk}/", {"phone": self.patient.phone}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "A patient with this phone number already exists")

    def test_update_other_doctors_patient_not_found(self):
        response = self._client_for(self.other_doctor).patch(
            f"/api/patients/{self.patient.pk}/", {"age": 1}, format="json"
        )

        self.assertEqual(response.status_code, 404)
        self.patient.refresh_from_db()
        self.assertEqual(self.patient.age, 61)

    def test_delete(self):
        response = self._client_for(self.doctor).delete(f"/api/patients/{self.patient.pk}/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["message"], "Patient deleted successfully")
        self.assertFalse(Patient.objects.filter(pk=self.patient.pk).exists())

    def test_delete_other_doctors_patient_not_found(self):
        response = self._client_for(self.other_doctor).delete(f"/api/patients/{self.patient.pk}/")

        self.assertEqual(response.status_code, 404)
        self.assertTrue(Patient.objects.filter(pk=self.patient.pk).exists())
