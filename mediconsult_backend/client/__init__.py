"""Python client for the MediConsult API."""

from .session import ApiError, ApiSession
from .wizard import DraftIncomplete, PrescriptionDraft

__all__ = ["ApiError", "ApiSession", "DraftIncomplete", "PrescriptionDraft"]
