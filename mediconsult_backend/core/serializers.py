"""Serializers for the core app.

Contains serializers for registration, login and the verification flow, plus
the read serializers for User and Role. Wire format uses camelCase keys.
"""

from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from rest_framework import serializers

from mediconsult_backend.core.exceptions import ConflictError
from mediconsult_backend.core.models import Role, User


# -----------------------------------------------------------------------------
# Role / User Serializers
# -----------------------------------------------------------------------------


class RoleSerializer(serializers.ModelSerializer):
    """Read-only serializer for Role model."""

    class Meta:
        model = Role
        fields = ['id', 'name', 'label']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Public representation of a doctor account."""

    role = serializers.SerializerMethodField()
    licenseNumber = serializers.CharField(source='license_number', read_only=True)
    isEmailVerified = serializers.BooleanField(source='is_email_verified', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'email',
            'phone',
            'role',
            'licenseNumber',
            'specialization',
            'isEmailVerified',
        ]
        read_only_fields = fields

    def get_role(self, obj):
        return obj.role_name


class DoctorSummarySerializer(serializers.ModelSerializer):
    """Doctor fields joined into prescriptions."""

    licenseNumber = serializers.CharField(source='license_number', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'licenseNumber', 'specialization']
        read_only_fields = fields


# -----------------------------------------------------------------------------
# Registration & Verification
# -----------------------------------------------------------------------------


class RegisterSerializer(serializers.Serializer):
    """Validates a doctor sign-up and creates the (unverified) account."""

    ROLE_CHOICES = [Role.DOCTOR, Role.ADMIN]

    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    phone = serializers.CharField(max_length=50)
    role = serializers.ChoiceField(choices=ROLE_CHOICES, default=Role.DOCTOR)
    licenseNumber = serializers.CharField(
        source='license_number', max_length=100, required=False, allow_blank=True, default=''
    )
    specialization = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')

    def validate_name(self, value):
        value = ' '.join(value.split())
        if not value:
            raise serializers.ValidationError('Name is required.')
        return value

    def validate_email(self, value):
        return value.strip().lower()

    def validate_password(self, value):
        try:
            validate_password(value)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(list(exc.messages))
        return value

    def validate(self, attrs):
        if User.objects.filter(email=attrs['email']).exists():
            raise ConflictError('User already exists')
        if attrs.get('role') == Role.DOCTOR:
            errors = {}
            if not (attrs.get('license_number') or '').strip():
                errors['licenseNumber'] = 'License number is required for doctors.'
            if not (attrs.get('specialization') or '').strip():
                errors['specialization'] = 'Specialization is required for doctors.'
            if errors:
                raise serializers.ValidationError(errors)
        return attrs

    def create(self, validated_data):
        role = Role.get_by_name(validated_data.pop('role'))
        password = validated_data.pop('password')
        user = User(role=role, **validated_data)
        user.set_password(password)
        user.issue_verification_token()
        try:
            with transaction.atomic():
                user.save()
        except IntegrityError:
            raise ConflictError('User already exists')
        return user


class LoginSerializer(serializers.Serializer):
    """Validates credentials.

    The verification check happens in the view so it can answer with the
    ``emailVerificationRequired`` flag.
    """

    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True)

    def validate(self, attrs):
        email = attrs['email'].strip().lower()
        user = authenticate(
            request=self.context.get('request'),
            email=email,
            password=attrs['password'],
        )
        if user is None:
            raise serializers.ValidationError({'message': 'Invalid credentials'})

        attrs['user'] = user
        return attrs


class VerifyEmailSerializer(serializers.Serializer):
    token = serializers.CharField(
        required=True,
        error_messages={'required': 'Verification token is required', 'blank': 'Verification token is required'},
    )


class ResendVerificationSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)

    def validate_email(self, value):
        return value.strip().lower()


class RefreshSerializer(serializers.Serializer):
    """Validates a refresh token for the refresh endpoint."""

    refresh = serializers.CharField(required=True)

    def validate_refresh(self, value):
        from rest_framework_simplejwt.exceptions import TokenError
        from rest_framework_simplejwt.tokens import RefreshToken

        try:
            RefreshToken(value)
        except TokenError as e:
            raise serializers.ValidationError(f'Invalid or expired refresh token: {e}')
        return value
