"""Core permissions for RBAC (Role-Based Access Control).

Base permission class with the read_roles/write_roles pattern plus the
ownership rule shared by every doctor-scoped resource.

Standard roles: doctor, admin
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


class RBACPermission(BasePermission):
    """Base class for RBAC permissions with read_roles/write_roles pattern.

    Subclasses should define:
    - read_roles: set of role names that can perform GET/HEAD/OPTIONS
    - write_roles: set of role names that can perform POST/PUT/PATCH/DELETE
    """

    read_roles: set = set()
    write_roles: set = set()

    def _role_name(self, request):
        user = getattr(request, "user", None)
        role = getattr(user, "role", None)
        return getattr(role, "name", None)

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return False

        role_name = self._role_name(request)
        if not role_name:
            return False

        if request.method in SAFE_METHODS:
            return role_name in self.read_roles

        return role_name in self.write_roles

    def has_object_permission(self, request, view, obj):
        return True


class DoctorOwnedPermission(RBACPermission):
    """Doctors and admins work on their own records only.

    Views also filter querysets by ``doctor=request.user`` so foreign records
    surface as 404; the object check is the second line.
    """

    read_roles = {"doctor", "admin"}
    write_roles = {"doctor", "admin"}

    def has_object_permission(self, request, view, obj):
        return getattr(obj, "doctor_id", None) == getattr(request.user, "id", None)
