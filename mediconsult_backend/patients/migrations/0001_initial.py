import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Patient",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("age", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(150)])),
                ("gender", models.CharField(choices=[("male", "Male"), ("female", "Female"), ("other", "Other")], max_length=10)),
                ("phone", models.CharField(max_length=50)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("address", models.TextField(blank=True, default="")),
                ("emergency_contact", models.CharField(blank=True, default="", max_length=200)),
                ("allergies", models.TextField(blank=True, default="")),
                ("comorbidities", models.TextField(blank=True, default="")),
                ("smoking_history", models.TextField(blank=True, default="")),
                ("occupational_exposure", models.TextField(blank=True, default="")),
                ("insurance_id", models.CharField(blank=True, default="", max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("doctor", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="patients", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Patient",
                "verbose_name_plural": "Patients",
                "db_table": "patients_patient",
                "ordering": ["-updated_at", "-id"],
                "indexes": [models.Index(fields=["doctor", "updated_at"], name="patients_pa_doctor_3e9b1f_idx")],
                "constraints": [models.UniqueConstraint(fields=("doctor", "phone"), name="patients_unique_doctor_phone")],
            },
        ),
    ]
