from rest_framework import permissions


class IsJobAdmin(permissions.BasePermission):
    """
    Only administrators may post job listings to the catalog.
    """
    message = "You don't have permission to access this area. This section is restricted to administrators only."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return bool(user.is_staff or user.is_superuser)
