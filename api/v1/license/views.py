"""
License API views.

These endpoints are called by EdgeCache sites to:
- Activate a license on a site
- Verify a license periodically
- Deactivate a license on a site
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.license.serializers import (
    LicenseResultSerializer,
    LicenseSiteRequestSerializer,
    OperationResultSerializer,
)
from licenses.application.services.engine_factory import build_license_engine

DEFAULT_CALLER_ADDRESS = "127.0.0.1"


def caller_address(request: Request) -> str:
    """Remote address of the caller, loopback when the server did not supply one."""
    return request.META.get("REMOTE_ADDR") or DEFAULT_CALLER_ADDRESS


def _site_request(request: Request) -> dict:
    serializer = LicenseSiteRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


def _license_response(result) -> Response:
    code = status.HTTP_200_OK if result.is_active else status.HTTP_422_UNPROCESSABLE_ENTITY
    return Response(LicenseResultSerializer(result).data, status=code)


def _operation_response(result) -> Response:
    code = status.HTTP_200_OK if result.ok else status.HTTP_422_UNPROCESSABLE_ENTITY
    return Response(OperationResultSerializer(result).data, status=code)


class ActivateLicenseView(APIView):
    """View for activating a license on a site."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Bind a license key to a site. The configured master key is "
            "provisioned as a pro license on first use."
        ),
        tags=["License API"],
        request=LicenseSiteRequestSerializer,
        responses={
            200: LicenseResultSerializer,
            401: {"description": "Invalid request signature"},
            422: LicenseResultSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a license."""
        data = _site_request(request)
        result = build_license_engine().activate(
            data["license_key"], data["site_url"], caller_address(request)
        )
        return _license_response(result)


class VerifyLicenseView(APIView):
    """View for re-checking a license."""

    @extend_schema(
        operation_id="verify_license",
        summary="Verify License",
        description="Check a license for a site and refresh the site's last verification time.",
        tags=["License API"],
        request=LicenseSiteRequestSerializer,
        responses={
            200: LicenseResultSerializer,
            401: {"description": "Invalid request signature"},
            422: LicenseResultSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Verify a license."""
        data = _site_request(request)
        result = build_license_engine().verify(
            data["license_key"], data["site_url"], caller_address(request)
        )
        return _license_response(result)


class DeactivateLicenseView(APIView):
    """View for releasing a license from a site."""

    @extend_schema(
        operation_id="deactivate_license",
        summary="Deactivate License",
        tags=["License API"],
        request=LicenseSiteRequestSerializer,
        responses={
            200: OperationResultSerializer,
            401: {"description": "Invalid request signature"},
            422: OperationResultSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Deactivate a license."""
        data = _site_request(request)
        result = build_license_engine().deactivate(data["license_key"], data["site_url"])
        return _operation_response(result)
