"""Tests for Authentication endpoints.

Tests cover:
- Register (POST /api/auth/register/)
- Verify email (GET/POST /api/auth/verify-email/)
- Resend verification (POST /api/auth/resend-verification/)
- Login (POST /api/auth/login/)
- Refresh (POST /api/auth/refresh/)
- Me (GET /api/auth/me/)
"""

from __future__ import annotations

from datetime import timedelta
from unittest import mock

from django.core import mail
from django.test import TestCase
from django.utils import timezone

from rest_framework import status
from rest_framework.test import APIClient

from mediconsult_backend.core.models import Role, User


REGISTER_PAYLOAD = {
    "name": "Dr. Asha Rao",
    "email": "Asha.Rao@Example.com",
    "password": "SecurePass123!",
    "phone": "+91 98450 00001",
    "licenseNumber": "KMC-12345",
    "specialization": "Pulmonology",
}


class RegistrationTest(TestCase):
    """Tests for sign-up and the verification flow."""

    def setUp(self):
        self.client = APIClient()
        self.client.defaults["HTTP_HOST"] = "localhost"

    def test_register_creates_unverified_doctor_and_sends_email(self):
        response = self.client.post("/api/auth/register/", REGISTER_PAYLOAD, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(
            response.data["message"],
            "User registered successfully. Please check your email to verify your account.",
        )
        user_data = response.data["user"]
        self.assertEqual(user_data["email"], "asha.rao@example.com")
        self.assertEqual(user_data["role"], "doctor")
        self.assertEqual(user_data["licenseNumber"], "KMC-12345")
        self.assertFalse(user_data["isEmailVerified"])
        self.assertNotIn("password", user_data)

        user = User.objects.get(email="asha.rao@example.com")
        self.assertTrue(user.check_password("SecurePass123!"))
        self.assertEqual(len(user.email_verification_token), 64)
        self.assertGreater(user.email_verification_expires, timezone.now() + timedelta(hours=23))

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["asha.rao@example.com"])
        self.assertIn(f"verify-email?token={user.email_verification_token}", mail.outbox[0].body)

    def test_register_duplicate_email_returns_400(self):
        self.client.post("/api/auth/register/", REGISTER_PAYLOAD, format="json")
        response = self.client.post(
            "/api/auth/register/",
            {**REGISTER_PAYLOAD, "email": "asha.rao@example.com"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "User already exists")
        self.assertEqual(User.objects.count(), 1)

    def test_register_doctor_requires_license_and_specialization(self):
        payload = {**REGISTER_PAYLOAD}
        payload.pop("licenseNumber")
        payload["specialization"] = ""
        response = self.client.post("/api/auth/register/", payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("licenseNumber", response.data["errors"])
        self.assertIn("specialization", response.data["errors"])

    def test_register_short_password_returns_400(self):
        response = self.client.post(
            "/api/auth/register/",
            {**REGISTER_PAYLOAD, "password": "abc"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.data["errors"])

    def test_register_succeeds_when_email_dispatch_fails(self):
        with mock.patch(
            "mediconsult_backend.core.views.send_verification_email_task.delay",
            side_effect=ConnectionError("smtp down"),
        ):
            response = self.client.post("/api/auth/register/", REGISTER_PAYLOAD, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(User.objects.filter(email="asha.rao@example.com").exists())

    def test_verify_email_with_query_token(self):
        self.client.post("/api/auth/register/", REGISTER_PAYLOAD, format="json")
        user = User.objects.get(email="asha.rao@example.com")
        mail.outbox.clear()

        response = self.client.get(f"/api/auth/verify-email/?token={user.email_verification_token}")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["verified"])
        user.refresh_from_db()
        self.assertTrue(user.is_email_verified)
        self.assertIsNone(user.email_verification_token)
        self.assertIsNone(user.email_verification_expires)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].subject, "Welcome to MediConsult")

    def test_verify_email_token_is_one_time(self):
        self.client.post("/api/auth/register/", REGISTER_PAYLOAD, format="json")
        token = User.objects.get(email="asha.rao@example.com").email_verification_token

        first = self.client.post("/api/auth/verify-email/", {"token": token}, format="json")
        second = self.client.post("/api/auth/verify-email/", {"token": token}, format="json")

        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(second.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(second.data["message"], "Invalid or expired verification token")

    def test_verify_email_expired_token_returns_400(self):
        self.client.post("/api/auth/register/", REGISTER_PAYLOAD, format="json")
        user = User.objects.get(email="asha.rao@example.com")
        user.email_verification_expires = timezone.now() - timedelta(minutes=1)
        user.save()

        response = self.client.get(f"/api/auth/verify-email/?token={user.email_verification_token}")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        user.refresh_from_db()
        self.assertFalse(user.is_email_verified)

    def test_verify_email_missing_token_returns_400(self):
        response = self.client.get("/api/auth/verify-email/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Verification token is required")

    def test_verify_email_blank_token_post_returns_400(self):
        response = self.client.post("/api/auth/verify-email/", {"token": "  "}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Verification token is required")

    def test_resend_verification_issues_new_token(self):
        self.client.post("/api/auth/register/", REGISTER_PAYLOAD, format="json")
        old_token = User.objects.get(email="asha.rao@example.com").email_verification_token
        mail.outbox.clear()

        response = self.client.post(
            "/api/auth/resend-verification/",
            {"email": "asha.rao@example.com"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Verification email sent successfully")
        new_token = User.objects.get(email="asha.rao@example.com").email_verification_token
        self.assertNotEqual(old_token, new_token)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn(new_token, mail.outbox[0].body)

    def test_resend_verification_survives_email_dispatch_failure(self):
        self.client.post("/api/auth/register/", REGISTER_PAYLOAD, format="json")
        old_token = User.objects.get(email="asha.rao@example.com").email_verification_token

        with mock.patch(
            "mediconsult_backend.core.views.send_verification_email_task.delay",
            side_effect=ConnectionError("smtp down"),
        ), self.assertLogs("mediconsult_backend.core.views", level="ERROR"):
            response = self.client.post(
                "/api/auth/resend-verification/",
                {"email": "asha.rao@example.com"},
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotEqual(User.objects.get(email="asha.rao@example.com").email_verification_token, old_token)

    def test_resend_verification_unknown_email_returns_404(self):
        response = self.client.post(
            "/api/auth/resend-verification/",
            {"email": "nobody@example.com"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "User not found")

    def test_resend_verification_already_verified_returns_400(self):
        User.objects.create_user(
            email="verified@example.com",
            password="SecurePass123!",
            name="Verified",
            is_email_verified=True,
        )
        response = self.client.post(
            "/api/auth/resend-verification/",
            {"email": "verified@example.com"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Email is already verified")


class AuthenticationTest(TestCase):
    """Tests for login, refresh and /me."""

    def setUp(self):
        self.role_doctor = Role.get_by_name(Role.DOCTOR)
        self.doctor = User.objects.create_user(
            email="doctor_auth@example.com",
            password="SecurePass123!",
            name="Dr. Auth",
            phone="555-0100",
            role=self.role_doctor,
            license_number="LIC-1",
            specialization="General Medicine",
            is_email_verified=True,
        )
        self.unverified = User.objects.create_user(
            email="unverified_auth@example.com",
            password="SecurePass123!",
            name="Dr. Pending",
            role=self.role_doctor,
        )
        self.inactive_user = User.objects.create_user(
            email="inactive_auth@example.com",
            password="SecurePass123!",
            name="Dr. Inactive",
            role=self.role_doctor,
            is_email_verified=True,
            is_active=False,
        )

        self.client = APIClient()
        self.client.defaults["HTTP_HOST"] = "localhost"

    def _login(self, email="doctor_auth@example.com", password="SecurePass123!"):
        return self.client.post(
            "/api/auth/login/",
            {"email": email, "password": password},
            format="json",
        )

    # ========== LOGIN TESTS ==========

    def test_login_success_returns_tokens_and_user(self):
        response = self._login()

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Login successful")
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["user"]["id"], self.doctor.id)
        self.assertEqual(response.data["user"]["role"], "doctor")
        self.assertEqual(response.data["user"]["specialization"], "General Medicine")

    def test_login_email_is_case_insensitive(self):
        response = self._login(email="Doctor_Auth@Example.com")

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_login_wrong_password_returns_400(self):
        response = self._login(password="WrongPassword!")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Invalid credentials")
        self.assertNotIn("access", response.data)

    def test_login_unknown_email_returns_400(self):
        response = self._login(email="nobody@example.com")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Invalid credentials")

    def test_login_unverified_user_is_rejected_with_flag(self):
        response = self._login(email="unverified_auth@example.com")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.data["emailVerificationRequired"])
        self.assertNotIn("access", response.data)

    def test_login_inactive_user_returns_400(self):
        response = self._login(email="inactive_auth@example.com")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_missing_fields_returns_400(self):
        response = self.client.post("/api/auth/login/", {"email": "doctor_auth@example.com"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post("/api/auth/login/", {"password": "SecurePass123!"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    # ========== REFRESH TESTS ==========

    def test_refresh_success_returns_new_access_token(self):
        refresh_token = self._login().data["refresh"]

        response = self.client.post("/api/auth/refresh/", {"refresh": refresh_token}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["access"])

    def test_refresh_invalid_token_returns_400(self):
        response = self.client.post("/api/auth/refresh/", {"refresh": "invalid_token_here"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    # ========== ME ENDPOINT TESTS ==========

    def test_me_with_valid_token_returns_user(self):
        access_token = self._login().data["access"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access_token}")
        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["id"], self.doctor.id)
        self.assertEqual(response.data["user"]["email"], "doctor_auth@example.com")

    def test_me_without_token_returns_401(self):
        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn("message", response.data)

    def test_me_with_invalid_token_returns_401(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer invalid_token_here")
        response = self.client.get("/api/auth/me/")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    # ========== TOKEN CONTENT TESTS ==========

    def test_refresh_token_contains_role(self):
        import jwt
        from django.conf import settings

        refresh_token = self._login().data["refresh"]

        decoded = jwt.decode(
            refresh_token,
            settings.SIMPLE_JWT.get("SIGNING_KEY", settings.SECRET_KEY),
            algorithms=[settings.SIMPLE_JWT.get("ALGORITHM", "HS256")],
        )

        self.assertEqual(int(decoded["user_id"]), self.doctor.id)
        self.assertEqual(decoded["role"], "doctor")

    def test_health_endpoint_no_auth_required(self):
        response = self.client.get("/api/health/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["status"], "ok")
