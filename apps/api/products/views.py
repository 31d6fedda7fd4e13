"""
Product API Views
Read-only catalog endpoints.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import UserRateThrottle

from apps.products.models import Product

from .serializers import ProductSerializer

logger = logging.getLogger(__name__)


class ProductCatalogThrottle(UserRateThrottle):
    """Throttling for catalog reads (per user, per IP for anonymous clients)"""
    scope = 'product_catalog'


@api_view(['GET'])
@permission_classes([AllowAny])
@throttle_classes([ProductCatalogThrottle])
def product_list(request: Request) -> Response:
    """
    Public endpoint for the published product catalog.
    """
    queryset = Product.objects.published().order_by('id')

    serializer = ProductSerializer(queryset, many=True)
    return Response({
        'results': serializer.data,
        'count': len(serializer.data)
    })


@api_view(['GET'])
@permission_classes([AllowAny])
@throttle_classes([ProductCatalogThrottle])
def product_detail(request: Request, product_id: int) -> Response:
    """
    Public endpoint for one product. Unpublished products are visible to their seller only.
    """
    visible = Product.objects.published()
    if request.user and request.user.is_authenticated:
        visible = visible | Product.objects.owned_by(request.user.pk)

    try:
        product = visible.get(pk=product_id)
    except Product.DoesNotExist:
        logger.debug(f"🔎 [Products API] Product {product_id} not visible to user {request.user.pk}")
        return Response({
            'errors': {'detail': 'Product not found'}
        }, status=status.HTTP_404_NOT_FOUND)

    serializer = ProductSerializer(product)
    return Response(serializer.data)
