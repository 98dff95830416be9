from mediconsult_backend.core.permissions import DoctorOwnedPermission


class PrescriptionPermission(DoctorOwnedPermission):
    """RBAC for prescription and saved-suggestion endpoints.

    - doctor: full access to own prescriptions
    - admin: full access to own prescriptions
    """

    read_roles = {"admin", "doctor"}
    write_roles = {"admin", "doctor"}
