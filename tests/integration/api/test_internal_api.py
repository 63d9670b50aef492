"""
Integration tests for the internal license management API.
"""
import pytest
from django.urls import reverse

from core.domain.hashing import hash_license_key
from licenses.infrastructure.models import License as LicenseModel


@pytest.mark.django_db
@pytest.mark.integration
class TestAdminToken:
    """Integration tests for admin token checks."""

    def test_missing_token(self, api_client):
        """Test request without the admin token."""
        response = api_client.get(reverse("internal-licenses"))

        assert response.status_code == 401
        assert response.json() == {"message": "unauthorized"}

    def test_wrong_token(self, api_client):
        """Test request with a wrong admin token."""
        response = api_client.post(
            reverse("internal-licenses"),
            {"license_key": "EDGE-1"},
            format="json",
            HTTP_X_EDGECACHE_ADMIN_TOKEN="nope",
        )

        assert response.status_code == 401
        assert LicenseModel.objects.count() == 0

    def test_token_not_configured(self, api_client, admin_headers, settings):
        """Test server without an admin token refuses every call."""
        settings.ADMIN_TOKEN = ""
        response = api_client.get(reverse("internal-licenses"), **admin_headers)

        assert response.status_code == 500
        assert response.json() == {"message": "admin token not configured"}


    def test_whitespace_token_is_configured(self, api_client, settings):
        """Test a configured token is used verbatim, never trimmed to empty."""
        settings.ADMIN_TOKEN = "   "

        response = api_client.get(reverse("internal-licenses"), HTTP_X_EDGECACHE_ADMIN_TOKEN="x")

        assert response.status_code == 401

    def test_configured_token_not_trimmed(self, api_client, settings):
        """Test surrounding whitespace in the configured token must be matched."""
        settings.ADMIN_TOKEN = "tok "

        response = api_client.get(reverse("internal-licenses"), HTTP_X_EDGECACHE_ADMIN_TOKEN="tok")

        assert response.status_code == 401

    def test_header_is_trimmed(self, api_client, settings):
        """Test whitespace around the supplied header is ignored."""
        settings.ADMIN_TOKEN = "tok"

        response = api_client.get(
            reverse("internal-licenses"), HTTP_X_EDGECACHE_ADMIN_TOKEN=" tok "
        )

        assert response.status_code == 200


@pytest.mark.django_db
@pytest.mark.integration
class TestIssueLicenseAPI:
    """Integration tests for POST /api/v1/internal/licenses."""

    def test_issue_defaults(self, api_client, admin_headers):
        """Test plan and status defaults."""
        response = api_client.post(
            reverse("internal-licenses"),
            {"license_key": "EDGE-NEW"},
            format="json",
            **admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True, "message": "license upserted"}
        stored = LicenseModel.objects.get(key_hash=hash_license_key("EDGE-NEW"))
        assert stored.plan == "pro"
        assert stored.status == "active"
        assert stored.features == []
        assert stored.expires_at is None

    def test_issue_normalizes(self, api_client, admin_headers):
        """Test bogus values and feature cleaning."""
        api_client.post(
            reverse("internal-licenses"),
            {
                "license_key": "EDGE-N",
                "plan": "bogus",
                "status": "bogus",
                "features": ["a", "", "  b  "],
                "expires_at": 1900000000,
            },
            format="json",
            **admin_headers,
        )

        stored = LicenseModel.objects.get(key_hash=hash_license_key("EDGE-N"))
        assert stored.plan == "pro"
        assert stored.status == "active"
        assert stored.features == ["a", "b"]
        assert stored.expires_at == 1900000000

    def test_non_list_features(self, api_client, admin_headers):
        """Test features that are not a list are treated as none."""
        api_client.post(
            reverse("internal-licenses"),
            {"license_key": "EDGE-S", "features": "prefetch"},
            format="json",
            **admin_headers,
        )

        assert LicenseModel.objects.get().features == []

    def test_null_values_use_defaults(self, api_client, admin_headers):
        """Test null plan, status and features fall back to the defaults."""
        response = api_client.post(
            reverse("internal-licenses"),
            {"license_key": "EDGE-NULL", "plan": None, "status": None, "features": None},
            format="json",
            **admin_headers,
        )

        assert response.status_code == 200
        stored = LicenseModel.objects.get(key_hash=hash_license_key("EDGE-NULL"))
        assert stored.plan == "pro"
        assert stored.status == "active"
        assert stored.features == []

    def test_null_key(self, api_client, admin_headers):
        """Test null license key is reported like a missing one."""
        response = api_client.post(
            reverse("internal-licenses"), {"license_key": None}, format="json", **admin_headers
        )

        assert response.status_code == 422
        assert response.json() == {"ok": False, "message": "license_key is required"}

    def test_null_feature_entries_dropped(self, api_client, admin_headers):
        """Test null and non-string feature entries are not stored."""
        api_client.post(
            reverse("internal-licenses"),
            {"license_key": "EDGE-R", "features": ["a", None, 3, {"b": 1}]},
            format="json",
            **admin_headers,
        )

        assert LicenseModel.objects.get().features == ["a"]

    def test_missing_key(self, api_client, admin_headers):
        """Test issuing without a license key."""
        response = api_client.post(
            reverse("internal-licenses"), {"plan": "pro"}, format="json", **admin_headers
        )

        assert response.status_code == 422
        assert response.json() == {"ok": False, "message": "license_key is required"}


@pytest.mark.django_db
@pytest.mark.integration
class TestListLicensesAPI:
    """Integration tests for GET /api/v1/internal/licenses."""

    def test_empty(self, api_client, admin_headers):
        """Test listing with no licenses."""
        response = api_client.get(reverse("internal-licenses"), **admin_headers)

        assert response.status_code == 200
        assert response.json() == {"items": []}

    def test_items_never_carry_keys(self, api_client, admin_headers):
        """Test list projection."""
        api_client.post(
            reverse("internal-licenses"),
            {"license_key": "EDGE-L", "plan": "free"},
            format="json",
            **admin_headers,
        )

        response = api_client.get(reverse("internal-licenses"), **admin_headers)

        items = response.json()["items"]
        assert len(items) == 1
        assert set(items[0]) == {"plan", "status", "expires_at", "created_at", "updated_at"}
        assert items[0]["plan"] == "free"
