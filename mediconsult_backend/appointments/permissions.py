from mediconsult_backend.core.permissions import DoctorOwnedPermission


class AppointmentPermission(DoctorOwnedPermission):
    """RBAC for appointments.

    - doctor: own appointments only (read/write)
    - admin: own appointments only (read/write)
    """

    read_roles = {"admin", "doctor"}
    write_roles = {"admin", "doctor"}
