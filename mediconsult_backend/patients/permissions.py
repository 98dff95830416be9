from mediconsult_backend.core.permissions import DoctorOwnedPermission


class PatientPermission(DoctorOwnedPermission):
    """RBAC for Patient endpoints.

    - doctor: full access to own patients
    - admin: full access to own patients
    """

    read_roles = {"admin", "doctor"}
    write_roles = {"admin", "doctor"}
