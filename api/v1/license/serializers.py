"""
Serializers for the site-facing license endpoints.
"""

from rest_framework import serializers


class LicenseSiteRequestSerializer(serializers.Serializer):
    """Body of activate / verify / deactivate.

    Missing or null fields are passed through as empty strings so the
    engine reports them as a validation result instead of a 400.
    """

    license_key = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default="", trim_whitespace=False
    )
    site_url = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default="", trim_whitespace=False
    )

    def validate(self, attrs):
        return {name: "" if value is None else value for name, value in attrs.items()}


class LicenseResultSerializer(serializers.Serializer):
    """Serializer for LicenseResult."""

    status = serializers.CharField()
    message = serializers.CharField()
    plan = serializers.CharField()
    features = serializers.ListField(child=serializers.CharField())
    expires_at = serializers.IntegerField(allow_null=True)


class OperationResultSerializer(serializers.Serializer):
    """Serializer for OperationResult."""

    ok = serializers.BooleanField()
    message = serializers.CharField()
