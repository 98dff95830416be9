import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("patients", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Prescription",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("prescription_number", models.CharField(editable=False, max_length=20, unique=True)),
                ("patient_snapshot", models.JSONField()),
                ("diagnosis", models.JSONField(default=list)),
                ("lifestyle", models.JSONField(default=dict)),
                ("vitals", models.JSONField(default=dict)),
                ("tests", models.JSONField(default=dict)),
                ("medications", models.JSONField(default=list)),
                ("notes", models.TextField(blank=True, default="")),
                ("date_issued", models.DateTimeField(default=django.utils.timezone.now)),
                ("patient_name", models.CharField(blank=True, default="", max_length=200)),
                ("diagnosis_text", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("doctor", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="prescriptions", to=settings.AUTH_USER_MODEL)),
                ("patient", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="prescriptions", to="patients.patient")),
            ],
            options={
                "verbose_name": "Prescription",
                "verbose_name_plural": "Prescriptions",
                "db_table": "prescriptions_prescription",
                "ordering": ["-date_issued", "-id"],
                "indexes": [models.Index(fields=["doctor", "date_issued"], name="prescriptio_doctor_8d2c4a_idx")],
            },
        ),
        migrations.CreateModel(
            name="SavedSymptom",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("symptom", models.CharField(max_length=200)),
                ("count", models.PositiveIntegerField(default=0)),
                ("last_used", models.DateTimeField(default=django.utils.timezone.now)),
                ("doctor", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="saved_symptoms", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "prescriptions_savedsymptom",
                "ordering": ["-count", "-last_used"],
                "constraints": [models.UniqueConstraint(fields=("doctor", "symptom"), name="prescriptions_unique_doctor_symptom")],
            },
        ),
    ]
