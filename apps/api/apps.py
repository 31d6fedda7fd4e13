# ===============================================================================
# MARKETPLACE API APP CONFIGURATION 🛠️
# ===============================================================================

from django.apps import AppConfig


class ApiConfig(AppConfig):
    """
    Configuration for the centralized REST API app.

    Serializers and views for every domain live here; business rules stay
    in each domain's service layer.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.api"
    label = "marketplace_api"
    verbose_name = "Marketplace API"
