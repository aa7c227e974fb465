"""
View mixins shared by doctor-scoped endpoints.
"""
from rest_framework.exceptions import NotFound

from apps.authz.models import Doctor
from apps.authz.permissions import IsDoctor
from apps.core.observability.correlation import bind_user


class DoctorScopedMixin:
    """
    Restricts a DRF view to doctor accounts and exposes the doctor profile.

    Also binds the JWT-authenticated user to the logging context, which the
    correlation middleware cannot see because DRF authenticates later.
    """
    permission_classes = [IsDoctor]

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        bind_user(request.user)

    def get_doctor(self):
        """Return the requesting user's Doctor profile or raise 404."""
        if not hasattr(self, '_doctor'):
            try:
                self._doctor = Doctor.objects.get(user=self.request.user)
            except Doctor.DoesNotExist:
                raise NotFound('Doctor profile not found')
        return self._doctor
