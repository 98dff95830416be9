"""
Prescription wizard state.

A ``PrescriptionDraft`` collects the five wizard steps in memory. Nothing is
sent to the server until ``submit()``, which issues the prescription in a
single create call.
"""

import copy

STEPS = ("patient", "diagnosis", "lifestyle", "vitals_and_tests", "medications")

PATIENT_SNAPSHOT_FIELDS = ("id", "name", "age", "gender", "phone", "email", "address", "emergencyContact")


class DraftIncomplete(Exception):
    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Prescription draft is incomplete: {', '.join(self.missing)}")


class PrescriptionDraft:
    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.patient = None
        self.diagnosis = []
        self.lifestyle = None
        self.vitals = None
        self.tests = None
        self.medications = []
        self.notes = ""

    # -- steps ---------------------------------------------------------------

    def set_patient(self, patient: dict) -> "PrescriptionDraft":
        """Use a patient record (as returned by the patients API) or a new patient."""
        self.patient = {key: patient[key] for key in PATIENT_SNAPSHOT_FIELDS if patient.get(key) is not None}
        return self

    def set_diagnosis(self, entries: list) -> "PrescriptionDraft":
        self.diagnosis = copy.deepcopy(list(entries))
        return self

    def set_lifestyle(self, lifestyle: dict) -> "PrescriptionDraft":
        self.lifestyle = copy.deepcopy(lifestyle)
        return self

    def set_vitals_and_tests(self, vitals: dict, tests: dict) -> "PrescriptionDraft":
        self.vitals = copy.deepcopy(vitals)
        self.tests = copy.deepcopy(tests)
        return self

    def set_medications(self, medications: list) -> "PrescriptionDraft":
        self.medications = copy.deepcopy(list(medications))
        return self

    # -- state ---------------------------------------------------------------

    def missing_steps(self) -> list:
        done = {
            "patient": bool(self.patient),
            "diagnosis": bool(self.diagnosis),
            "lifestyle": self.lifestyle is not None,
            "vitals_and_tests": self.vitals is not None and self.tests is not None,
            "medications": bool(self.medications),
        }
        return [step for step in STEPS if not done[step]]

    def is_complete(self) -> bool:
        return not self.missing_steps()

    def current_step(self):
        missing = self.missing_steps()
        return missing[0] if missing else None

    def to_payload(self) -> dict:
        missing = self.missing_steps()
        if missing:
            raise DraftIncomplete(missing)
        return {
            "patient": copy.deepcopy(self.patient),
            "diagnosis": copy.deepcopy(self.diagnosis),
            "lifestyle": copy.deepcopy(self.lifestyle),
            "vitals": copy.deepcopy(self.vitals),
            "tests": copy.deepcopy(self.tests),
            "medications": copy.deepcopy(self.medications),
            "notes": self.notes,
        }

    def submit(self, session) -> dict:
        """Issue the prescription through ``session``; returns the created prescription."""
        payload = self.to_payload()
        return session.post("/api/prescriptions/", json=payload)["prescription"]
