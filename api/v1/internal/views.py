"""
Internal API views.

Administrative endpoints guarded by the admin token header:
- List the most recent licenses
- Issue or replace a license
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import HasAdminToken
from api.v1.internal.serializers import (
    IssueLicenseRequestSerializer,
    LicenseListItemSerializer,
    LicenseListResponseSerializer,
)
from api.v1.license.serializers import OperationResultSerializer
from licenses.application.services.engine_factory import build_license_engine

LIST_LIMIT = 100

ADMIN_TOKEN_PARAMETER = OpenApiParameter(
    name="X-EdgeCache-Admin-Token",
    type=str,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Admin token",
)


class LicenseCollectionView(APIView):
    """View for listing and issuing licenses."""

    permission_classes = [HasAdminToken]

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="Most recently created licenses, newest first. Key material is never returned.",
        tags=["Internal API"],
        parameters=[ADMIN_TOKEN_PARAMETER],
        responses={
            200: LicenseListResponseSerializer,
            401: {"description": "Unauthorized"},
            500: {"description": "Admin token not configured"},
        },
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        items = build_license_engine().list_licenses(LIST_LIMIT)
        return Response({"items": LicenseListItemSerializer(items, many=True).data})

    @extend_schema(
        operation_id="issue_license",
        summary="Issue License",
        description=(
            "Create a license or fully replace an existing one. Unknown plans "
            "fall back to pro and unknown statuses to active."
        ),
        tags=["Internal API"],
        parameters=[ADMIN_TOKEN_PARAMETER],
        request=IssueLicenseRequestSerializer,
        responses={
            200: OperationResultSerializer,
            401: {"description": "Unauthorized"},
            422: OperationResultSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Issue or update a license."""
        serializer = IssueLicenseRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = build_license_engine().issue_or_update_license(
            license_key=data["license_key"],
            plan=data["plan"],
            status=data["status"],
            features=data["features"],
            expires_at=data["expires_at"],
        )
        code = status.HTTP_200_OK if result.ok else status.HTTP_422_UNPROCESSABLE_ENTITY
        return Response(OperationResultSerializer(result).data, status=code)
