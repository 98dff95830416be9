import secrets

from django.conf import settings
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils import timezone


class Role(models.Model):
    """User roles for RBAC (Role-Based Access Control).

    Standard roles: doctor, admin
    """

    DOCTOR = 'doctor'
    ADMIN = 'admin'

    LABELS = {
        DOCTOR: 'Doctor',
        ADMIN: 'Administrator',
    }

    name = models.CharField(max_length=64, unique=True, db_index=True)
    label = models.CharField(max_length=128)

    class Meta:
        db_table = 'core_role'
        ordering = ['name']
        verbose_name = 'Role'
        verbose_name_plural = 'Roles'

    def __str__(self) -> str:
        return self.label

    @classmethod
    def get_by_name(cls, name: str) -> 'Role':
        role, _ = cls.objects.get_or_create(
            name=name,
            defaults={'label': cls.LABELS.get(name, name.title())},
        )
        return role


class UserManager(BaseUserManager):
    """Manager for the email-identified User model."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('The email address must be set.')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_email_verified', True)
        extra_fields.setdefault('role', Role.get_by_name(Role.ADMIN))
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Doctor account.

    Extends Django's AbstractUser with:
    - email as the login identifier (unique)
    - role: ForeignKey to Role for RBAC
    - license/specialization, required for doctors
    - one-time email verification token with expiry
    """

    username = None
    first_name = None
    last_name = None

    name = models.CharField(max_length=150)
    email = models.EmailField('email address', unique=True)
    phone = models.CharField(max_length=50)
    role = models.ForeignKey(
        Role,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name='users',
    )
    license_number = models.CharField(max_length=100, blank=True, default='')
    specialization = models.CharField(max_length=150, blank=True, default='')

    is_email_verified = models.BooleanField(default=False)
    email_verification_token = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    email_verification_expires = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    objects = UserManager()

    class Meta:
        db_table = 'core_user'
        ordering = ['email']
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name

    @property
    def role_name(self):
        return getattr(self.role, 'name', None)

    def issue_verification_token(self) -> str:
        """Generate a fresh token valid for EMAIL_VERIFICATION_TTL (not saved)."""
        self.email_verification_token = secrets.token_hex(32)
        self.email_verification_expires = timezone.now() + settings.EMAIL_VERIFICATION_TTL
        return self.email_verification_token

    def mark_email_verified(self):
        """Consume the verification token (not saved)."""
        self.is_email_verified = True
        self.email_verification_token = None
        self.email_verification_expires = None


class Counter(models.Model):
    """Named integer sequence used to mint human-readable numbers."""

    name = models.CharField(max_length=64, unique=True)
    seq = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'core_counter'
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.name}={self.seq}"


class AuditLog(models.Model):
    """Audit log for patient-related actions.

    Tracks who accessed/modified patient data and when.
    patient_id is stored as IntegerField (not FK) so entries survive deletes.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
    )
    role_name = models.CharField(max_length=50, db_index=True)
    action = models.CharField(max_length=50, db_index=True)
    patient_id = models.IntegerField(null=True, blank=True, db_index=True)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)
    meta = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = 'core_auditlog'
        ordering = ['-timestamp', '-id']
        verbose_name = 'Audit Log'
        verbose_name_plural = 'Audit Logs'
        indexes = [
            models.Index(fields=['action', 'timestamp'], name='core_auditl_action_5b5f2e_idx'),
            models.Index(fields=['patient_id', 'timestamp'], name='core_auditl_patient_0d8c1a_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.timestamp} {self.action} (patient_id={self.patient_id})"
