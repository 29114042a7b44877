"""
URL configuration for license endpoints.
"""

from django.urls import path

from api.v1.license import views

urlpatterns = [
    path("license-info", views.LicenseInfoView.as_view(), name="license-info"),
    path("extend-license", views.ExtendLicenseView.as_view(), name="extend-license"),
]
