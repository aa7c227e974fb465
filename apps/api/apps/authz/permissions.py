"""
Authz permissions for doctor-scoped endpoints.
"""
from rest_framework import permissions
from apps.authz.models import UserTypeChoices


class IsDoctor(permissions.BasePermission):
    """
    Allows access only to authenticated users with user_type=doctor.

    Patients, documents and catalog writes are all scoped to the
    requesting doctor; patient accounts have no access to this API.
    """
    message = 'Only doctor accounts can access this resource.'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        return request.user.user_type == UserTypeChoices.DOCTOR
