"""
API permissions.
"""

import secrets

from django.conf import settings
from rest_framework.permissions import BasePermission

from api.exceptions import AdminTokenNotConfigured, Unauthorized


class HasAdminToken(BasePermission):
    """
    Grants access when the admin token header matches ``settings.ADMIN_TOKEN``.

    Raises instead of returning False so the response carries 401/500
    rather than DRF's generic 403.
    """

    def has_permission(self, request, view):
        expected = getattr(settings, "ADMIN_TOKEN", "") or ""
        if not expected:
            raise AdminTokenNotConfigured()

        header_name = getattr(settings, "ADMIN_TOKEN_HEADER", "X-EdgeCache-Admin-Token")
        supplied = request.headers.get(header_name, "").strip()
        if not secrets.compare_digest(expected.encode(), supplied.encode()):
            raise Unauthorized()
        return True
