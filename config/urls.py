"""
URL configuration for the Marketplace API
"""

from django.contrib import admin
from django.urls import include, path

# ===============================================================================
# MAIN URL PATTERNS
# ===============================================================================

urlpatterns = [
    path("admin/", admin.site.urls),
    # REST API (orders, product catalog)
    path("api/", include("apps.api.urls")),
]
