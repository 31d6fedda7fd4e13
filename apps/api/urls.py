# ===============================================================================
# MARKETPLACE API MAIN URLS 🚀
# ===============================================================================
#
# URL Structure:
#   /api/orders/    → Order intake and order history (authenticated)
#   /api/products/  → Read-only product catalog
#

from django.urls import include, path

from .orders import urls as order_urls
from .products import urls as product_urls

app_name = 'api'

urlpatterns = [
    path('orders/', include((order_urls, 'orders'))),
    path('products/', include((product_urls, 'products'))),
]
