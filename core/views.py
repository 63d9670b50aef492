"""
Core views for health checks, metrics and JSON error pages.
"""

import time

from django.db import connection
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse(
            {"ok": True, "service": "edgecache-license-api", "time": int(time.time())}
        )


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        """Check database connectivity."""
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                return JsonResponse({"status": "healthy", "database": "connected"})
        except Exception as e:  # pylint: disable=broad-exception-caught
            return JsonResponse(
                {"status": "unhealthy", "database": "disconnected", "error": str(e)},
                status=503,
            )


class MetricsView(View):
    """Prometheus scrape endpoint."""

    def get(self, _request):
        """Expose the default registry."""
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)


def not_found(_request, exception=None):
    """JSON body for unknown routes."""
    return JsonResponse({"message": "not found"}, status=404)


def server_error(_request):
    """JSON body for unhandled errors outside the REST views."""
    return JsonResponse({"message": "internal error", "error": None}, status=500)
