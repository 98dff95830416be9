"""
MediConsult seed command - creates reproducible demo data.

Usage:
    python manage.py seed           # seed all apps
    python manage.py seed --flush   # delete demo data first, then seed

The demo doctor logs in with demo.doctor@mediconsult.local / demo1234.
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from mediconsult_backend.appointments.seeders import seed_appointments
from mediconsult_backend.core.seeders import seed_core
from mediconsult_backend.patients.seeders import seed_patients
from mediconsult_backend.prescriptions.seeders import seed_prescriptions


class Command(BaseCommand):
    help = "Seed database with demo data for MediConsult"

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete existing demo data before seeding.",
        )

    def handle(self, *args, **options):
        flush = options.get("flush", False)

        self.stdout.write("=" * 80)
        self.stdout.write("  MediConsult Seed")
        self.stdout.write("=" * 80)

        steps = [
            ("Core (Roles, Demo doctor)", seed_core),
            ("Patients", seed_patients),
            ("Prescriptions", seed_prescriptions),
            ("Appointments", seed_appointments),
        ]

        try:
            with transaction.atomic():
                stats = {}
                for index, (label, seeder) in enumerate(steps, start=1):
                    self.stdout.write(f"\n[{index}/{len(steps)}] Seeding {label}...")
                    section_stats = seeder(flush=flush)
                    stats.update(section_stats)
                    self._print_stats(section_stats)

                self.stdout.write("\n" + "=" * 80)
                self.stdout.write(self.style.SUCCESS("  Seeding completed"))
                self.stdout.write("=" * 80)
                self._print_summary(stats)

        except Exception as e:
            self.stderr.write(f"\nSeeding failed: {e}")
            raise

    def _print_stats(self, stats):
        for key, value in stats.items():
            self.stdout.write(f"  - {key}: {value}")

    def _print_summary(self, stats):
        self.stdout.write("\nRecords created:")
        for key, value in sorted(stats.items()):
            self.stdout.write(f"  - {key}: {value}")
