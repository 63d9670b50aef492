"""
Integration tests for the site-facing license API.
"""
import hashlib
import hmac
import json
from unittest.mock import patch

import pytest
from django.urls import reverse
from prometheus_client import REGISTRY

from core.domain.exceptions import StorageError

SITE = "https://example.com"


@pytest.fixture
def issued(db, api_client, admin_headers):
    """Issue an active license through the internal API."""
    response = api_client.post(
        reverse("internal-licenses"),
        {"license_key": "EDGE-API", "plan": "enterprise", "features": ["cdn"]},
        format="json",
        **admin_headers,
    )
    assert response.status_code == 200
    return "EDGE-API"


@pytest.mark.django_db
@pytest.mark.integration
class TestActivateAPI:
    """Integration tests for POST /api/v1/license/activate."""

    def test_activate_success(self, api_client, issued):
        """Test activating an issued license."""
        response = api_client.post(
            reverse("activate-license"),
            {"license_key": issued, "site_url": SITE},
            format="json",
        )

        assert response.status_code == 200
        assert response.json() == {
            "status": "active",
            "message": "license activated",
            "plan": "enterprise",
            "features": ["cdn"],
            "expires_at": None,
        }

    def test_activate_unknown_key(self, api_client):
        """Test unknown key yields 422 with the full result shape."""
        response = api_client.post(
            reverse("activate-license"),
            {"license_key": "NOPE", "site_url": SITE},
            format="json",
        )

        assert response.status_code == 422
        assert response.json() == {
            "status": "invalid",
            "message": "invalid license key",
            "plan": "free",
            "features": [],
            "expires_at": None,
        }

    def test_activate_missing_fields(self, api_client):
        """Test empty body is reported by the engine, not as a 400."""
        response = api_client.post(reverse("activate-license"), {}, format="json")

        assert response.status_code == 422
        assert response.json()["message"] == "license_key and site_url are required"

    def test_activate_master_key(self, api_client, master_key):
        """Test the configured master key bootstraps a license."""
        response = api_client.post(
            reverse("activate-license"),
            {"license_key": master_key, "site_url": SITE},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["features"] == ["prefetch", "analytics"]

    def test_null_fields(self, api_client):
        """Test null key or site is reported like a missing one."""
        response = api_client.post(
            reverse("activate-license"),
            {"license_key": None, "site_url": SITE},
            format="json",
        )

        assert response.status_code == 422
        assert response.json()["status"] == "invalid"
        assert response.json()["message"] == "license_key and site_url are required"

    def test_long_site(self, api_client, issued):
        """Test a 600-character site identifier activates normally."""
        response = api_client.post(
            reverse("activate-license"),
            {"license_key": issued, "site_url": SITE + "/" + "x" * 600},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["status"] == "active"

    def test_malformed_json(self, api_client):
        """Test a body that is not JSON."""
        response = api_client.post(
            reverse("activate-license"), "{not json", content_type="application/json"
        )

        assert response.status_code == 400
        assert "message" in response.json()

    def test_engine_misconfigured(self, api_client, settings):
        """Test an unusable rate limit setting is a server error, not a client one."""
        settings.LICENSE_ENGINE = {
            "MASTER_KEY": "",
            "RATE_LIMIT_WINDOW_SECONDS": 0,
            "RATE_LIMIT_MAX_REQUESTS": 60,
        }

        response = api_client.post(
            reverse("activate-license"),
            {"license_key": "EDGE-1", "site_url": SITE},
            format="json",
        )

        assert response.status_code == 500
        assert response.json() == {"message": "internal error", "error": None}

    def test_storage_failure(self, api_client):
        """Test storage failures become a 500 without detail."""
        with patch("api.v1.license.views.build_license_engine") as build:
            build.return_value.activate.side_effect = StorageError("licenses.find failed")
            response = api_client.post(
                reverse("activate-license"),
                {"license_key": "EDGE-1", "site_url": SITE},
                format="json",
            )

        assert response.status_code == 500
        assert response.json() == {"message": "internal error", "error": None}

    def test_storage_failure_detail_in_debug(self, api_client, settings):
        """Test the failure detail is exposed in debug mode."""
        settings.DEBUG = True
        with patch("api.v1.license.views.build_license_engine") as build:
            build.return_value.activate.side_effect = StorageError("licenses.find failed")
            response = api_client.post(
                reverse("activate-license"),
                {"license_key": "EDGE-1", "site_url": SITE},
                format="json",
            )

        assert response.status_code == 500
        assert response.json()["error"] == "licenses.find failed"


@pytest.mark.django_db
@pytest.mark.integration
class TestVerifyAPI:
    """Integration tests for POST /api/v1/license/verify."""

    def test_verify_success(self, api_client, issued):
        """Test verifying an issued license."""
        response = api_client.post(
            reverse("verify-license"),
            {"license_key": issued, "site_url": SITE},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["message"] == "license valid"

    def test_verify_inactive(self, api_client, admin_headers):
        """Test verifying an inactive license."""
        api_client.post(
            reverse("internal-licenses"),
            {"license_key": "EDGE-OFF", "status": "inactive"},
            format="json",
            **admin_headers,
        )

        response = api_client.post(
            reverse("verify-license"),
            {"license_key": "EDGE-OFF", "site_url": SITE},
            format="json",
        )

        assert response.status_code == 422
        assert response.json()["status"] == "inactive"
        assert response.json()["message"] == "license inactive"

    def test_rate_limited(self, api_client, issued, settings):
        """Test the second call from the same address in a window is throttled."""
        settings.LICENSE_ENGINE = {
            "MASTER_KEY": "",
            "RATE_LIMIT_WINDOW_SECONDS": 60,
            "RATE_LIMIT_MAX_REQUESTS": 1,
        }
        payload = {"license_key": issued, "site_url": SITE}
        api_client.post(reverse("verify-license"), payload, format="json")

        response = api_client.post(reverse("verify-license"), payload, format="json")

        assert response.status_code == 422
        assert response.json()["status"] == "inactive"
        assert response.json()["message"] == "rate limit exceeded"


@pytest.mark.django_db
@pytest.mark.integration
class TestDeactivateAPI:
    """Integration tests for POST /api/v1/license/deactivate."""

    def test_deactivate_null_site(self, api_client):
        """Test null site is reported like a missing one."""
        response = api_client.post(
            reverse("deactivate-license"),
            {"license_key": "EDGE-X", "site_url": None},
            format="json",
        )

        assert response.status_code == 422
        assert response.json() == {
            "ok": False,
            "message": "license_key and site_url are required",
        }

    def test_deactivate_success(self, api_client, issued):
        """Test deactivating an activated site."""
        payload = {"license_key": issued, "site_url": SITE}
        api_client.post(reverse("activate-license"), payload, format="json")

        response = api_client.post(reverse("deactivate-license"), payload, format="json")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "message": "deactivated"}

    def test_deactivate_not_found(self, api_client):
        """Test deactivating a pair that never activated."""
        response = api_client.post(
            reverse("deactivate-license"),
            {"license_key": "EDGE-X", "site_url": SITE},
            format="json",
        )

        assert response.status_code == 422
        assert response.json() == {"ok": False, "message": "activation not found"}


@pytest.mark.django_db
@pytest.mark.integration
class TestRequestSignature:
    """Integration tests for request signing on license endpoints."""

    @pytest.fixture(autouse=True)
    def signing_secret(self, settings):
        settings.SIGNING_SECRET = "s3cret"

    def _post(self, api_client, body, signature=None):
        headers = {}
        if signature is not None:
            headers["HTTP_X_EDGECACHE_SIGNATURE"] = signature
        return api_client.post(
            reverse("verify-license"), body, content_type="application/json", **headers
        )

    def test_missing_signature(self, api_client):
        """Test unsigned request is rejected."""
        response = self._post(api_client, json.dumps({"license_key": "a", "site_url": "b"}))

        assert response.status_code == 401
        assert response.json() == {"message": "invalid signature"}

    def test_wrong_signature(self, api_client):
        """Test mis-signed request is rejected."""
        response = self._post(api_client, json.dumps({"license_key": "a"}), signature="00" * 32)

        assert response.status_code == 401

    def test_rejection_counted_by_route(self, api_client):
        """Test rejected requests are labelled with the URL pattern."""
        labels = {"error_type": "invalid_signature", "endpoint": "/api/v1/license/verify"}
        before = REGISTRY.get_sample_value("errors_total", labels) or 0

        self._post(api_client, json.dumps({"license_key": "a"}))

        assert REGISTRY.get_sample_value("errors_total", labels) == before + 1

    def test_valid_signature(self, api_client):
        """Test correctly signed request reaches the engine."""
        body = json.dumps({"license_key": "NOPE", "site_url": SITE})
        signature = hmac.new(b"s3cret", body.encode(), hashlib.sha256).hexdigest()

        response = self._post(api_client, body, signature=f" {signature} ")

        assert response.status_code == 422
        assert response.json()["message"] == "invalid license key"

    def test_internal_routes_not_signed(self, api_client, admin_headers):
        """Test admin endpoints rely on the admin token only."""
        response = api_client.get(reverse("internal-licenses"), **admin_headers)

        assert response.status_code == 200
