"""
URL configuration for internal API endpoints.
"""

from django.urls import path

from api.v1.internal import views

urlpatterns = [
    path(
        "licenses",
        views.LicenseCollectionView.as_view(),
        name="internal-licenses",
    ),
]
