"""Core app views.

Contains:
- health: Health check endpoint
- RegisterView: doctor sign-up, sends the verification email
- LoginView: JWT token obtain for verified accounts
- VerifyEmailView / ResendVerificationView: email verification flow
- RefreshView: JWT token refresh
- MeView: Current authenticated user info
"""

import logging

from django.db import connection
from django.http import JsonResponse
from django.utils import timezone

from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from rest_framework_simplejwt.tokens import RefreshToken

from mediconsult_backend.core.models import User
from mediconsult_backend.core.serializers import (
    LoginSerializer,
    RefreshSerializer,
    RegisterSerializer,
    ResendVerificationSerializer,
    UserSerializer,
    VerifyEmailSerializer,
)
from mediconsult_backend.core.tasks import send_verification_email_task, send_welcome_email_task

logger = logging.getLogger(__name__)


def health(request):
    """Health check endpoint - no authentication required."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1;')
    except Exception:
        logger.exception('Health check failed')
        return JsonResponse({'status': 'error'}, status=503)

    return JsonResponse({'status': 'ok'})


class RegisterView(APIView):
    """Create an unverified doctor account.

    POST /api/auth/register/
    Body: {"name", "email", "password", "phone", "role"?, "licenseNumber", "specialization"}
    Returns: 201 {"message": "...", "user": {...}}
    """

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info('User registered id=%s role=%s', user.id, user.role_name)

        try:
            send_verification_email_task.delay(user.email, user.email_verification_token, user.name)
        except Exception:
            logger.exception('Verification email dispatch failed for user id=%s', user.id)

        return Response(
            {
                'message': 'User registered successfully. Please check your email to verify your account.',
                'user': UserSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """Obtain JWT access and refresh tokens.

    POST /api/auth/login/
    Body: {"email": "...", "password": "..."}
    Returns: {"message": "...", "access": "...", "refresh": "...", "user": {...}}
    """

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data['user']

        if not user.is_email_verified:
            return Response(
                {
                    'message': 'Please verify your email before logging in. '
                    'Check your inbox for the verification link.',
                    'emailVerificationRequired': True,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        refresh = RefreshToken.for_user(user)
        refresh['role'] = user.role_name
        access = refresh.access_token

        return Response(
            {
                'message': 'Login successful',
                'access': str(access),
                'refresh': str(refresh),
                'user': UserSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )


class VerifyEmailView(APIView):
    """Consume a verification token.

    GET  /api/auth/verify-email/?token=...
    POST /api/auth/verify-email/  Body: {"token": "..."}
    """

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        return self._verify(request.query_params)

    def post(self, request, *args, **kwargs):
        return self._verify(request.data)

    def _verify(self, data):
        serializer = VerifyEmailSerializer(data=data)
        if not serializer.is_valid():
            raise ValidationError({'message': 'Verification token is required'})
        token = serializer.validated_data['token']

        user = User.objects.filter(
            email_verification_token=token,
            email_verification_expires__gt=timezone.now(),
        ).first()
        if user is None:
            raise ValidationError({'message': 'Invalid or expired verification token'})

        user.mark_email_verified()
        user.save(update_fields=[
            'is_email_verified',
            'email_verification_token',
            'email_verification_expires',
            'updated_at',
        ])
        logger.info('Email verified for user id=%s', user.id)

        try:
            send_welcome_email_task.delay(user.email, user.name)
        except Exception:
            logger.exception('Welcome email dispatch failed for user id=%s', user.id)

        return Response(
            {
                'message': 'Email verified successfully! You can now log in to your account.',
                'verified': True,
            },
            status=status.HTTP_200_OK,
        )


class ResendVerificationView(APIView):
    """Issue a new verification token and email it.

    POST /api/auth/resend-verification/
    Body: {"email": "..."}
    """

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = ResendVerificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = User.objects.filter(email=serializer.validated_data['email']).first()
        if user is None:
            raise NotFound('User not found')
        if user.is_email_verified:
            raise ValidationError({'message': 'Email is already verified'})

        user.issue_verification_token()
        user.save(update_fields=['email_verification_token', 'email_verification_expires', 'updated_at'])

        try:
            send_verification_email_task.delay(user.email, user.email_verification_token, user.name)
        except Exception:
            logger.exception('Verification email re-dispatch failed for user id=%s', user.id)

        return Response({'message': 'Verification email sent successfully'}, status=status.HTTP_200_OK)


class RefreshView(APIView):
    """Refresh JWT access token.

    POST /api/auth/refresh/
    Body: {"refresh": "..."}
    Returns: {"access": "..."}
    """

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        refresh = RefreshToken(serializer.validated_data['refresh'])
        return Response({'access': str(refresh.access_token)}, status=status.HTTP_200_OK)


class MeView(APIView):
    """Get current authenticated user info.

    GET /api/auth/me/
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        return Response({'user': UserSerializer(request.user).data}, status=status.HTTP_200_OK)
