"""
Serializers for the internal license management endpoints.
"""

from rest_framework import serializers


class IssueLicenseRequestSerializer(serializers.Serializer):
    """Serializer for issuing or replacing a license.

    Null values fall back to the same defaults as missing ones.
    """

    NULL_FALLBACKS = {"license_key": "", "plan": "pro", "status": "active"}

    license_key = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default=""
    )
    plan = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="pro")
    status = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default="active"
    )
    features = serializers.JSONField(required=False, allow_null=True, default=list)
    expires_at = serializers.IntegerField(required=False, allow_null=True, default=None)

    def validate_features(self, value):
        """Anything other than a list means no features."""
        if not isinstance(value, list):
            return []
        return value

    def validate(self, attrs):
        for name, fallback in self.NULL_FALLBACKS.items():
            if attrs.get(name) is None:
                attrs[name] = fallback
        return attrs


class LicenseListItemSerializer(serializers.Serializer):
    """Serializer for LicenseListItemDTO."""

    plan = serializers.CharField()
    status = serializers.CharField()
    expires_at = serializers.IntegerField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class LicenseListResponseSerializer(serializers.Serializer):
    """Serializer for the license listing."""

    items = LicenseListItemSerializer(many=True)
