"""
URL configuration for wiki project.

Comment endpoints live under /api/ (see comments/urls.py), the OpenAPI
schema under /api/schema/.
"""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path("api/", include("comments.urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
]
