"""Core App URLs - Authentication & Health.

Prefix: /api/
Routes:
    GET  /api/health/                    - Health check (no auth)
    POST /api/auth/register/             - Doctor sign-up
    POST /api/auth/login/                - JWT token obtain (verified accounts)
    GET  /api/auth/verify-email/         - Verify with ?token=
    POST /api/auth/verify-email/         - Verify with {"token"}
    POST /api/auth/resend-verification/  - New verification email
    POST /api/auth/refresh/              - JWT token refresh
    GET  /api/auth/me/                   - Current user info (requires auth)
"""

from django.urls import path

from mediconsult_backend.core.views import (
    health,
    LoginView,
    MeView,
    RefreshView,
    RegisterView,
    ResendVerificationView,
    VerifyEmailView,
)

app_name = 'core'

urlpatterns = [
    # Health check
    path('health/', health, name='health'),

    # Registration & verification
    path('auth/register/', RegisterView.as_view(), name='register'),
    path('auth/verify-email/', VerifyEmailView.as_view(), name='verify-email'),
    path('auth/resend-verification/', ResendVerificationView.as_view(), name='resend-verification'),

    # JWT Authentication
    path('auth/login/', LoginView.as_view(), name='login'),
    path('auth/refresh/', RefreshView.as_view(), name='refresh'),
    path('auth/me/', MeView.as_view(), name='me'),
]
