"""
Order API Views
Order history and order intake for the authenticated user.
"""

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import UserRateThrottle

from apps.common.request_ip import get_safe_client_ip
from apps.common.validators import log_security_event
from apps.orders.exceptions import OrderPersistenceError
from apps.orders.services import OrderIntakeService, OrderQueryService

from .serializers import INCLUDABLE_RELATIONS, OrderCreateInputSerializer, OrderSerializer

logger = logging.getLogger(__name__)


# 🔒 SECURITY: Per-user throttles for order endpoints
class OrderCreateThrottle(UserRateThrottle):
    """Throttling for order creation; reads on the same route are not counted"""
    scope = 'order_create'

    def allow_request(self, request: Request, view) -> bool:
        if request.method != 'POST':
            return True
        return super().allow_request(request, view)


class OrderListThrottle(UserRateThrottle):
    """Throttling for order listing and detail endpoints"""
    scope = 'order_list'

    def allow_request(self, request: Request, view) -> bool:
        if request.method == 'POST':
            return True
        return super().allow_request(request, view)


def _requested_includes(request: Request, *always: str) -> frozenset[str]:
    """Parse ?include=products,user into the set of embeddable relations"""
    raw = request.query_params.get('include', '')
    requested = {name.strip() for name in raw.split(',') if name.strip()}
    return frozenset((requested | set(always)) & INCLUDABLE_RELATIONS)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
@throttle_classes([OrderListThrottle, OrderCreateThrottle])
def order_collection(request: Request) -> Response:
    """
    GET lists the caller's orders; POST places a new order.
    """
    if request.method == 'POST':
        return _create_order(request)
    return _list_orders(request)


def _list_orders(request: Request) -> Response:
    orders = OrderQueryService.list_orders(request.user)
    serializer = OrderSerializer(
        orders, many=True, context={'include': _requested_includes(request)}
    )

    return Response({
        'results': serializer.data,
        'count': len(serializer.data)
    })


def _create_order(request: Request) -> Response:
    """
    Place an order from product ids with server-side pricing.
    A client-supplied total is never read.
    """
    logger.info(f"🛒 [Orders API] Order request from user {request.user.pk}")

    input_serializer = OrderCreateInputSerializer(data=request.data)
    if not input_serializer.is_valid():
        return Response({
            'errors': input_serializer.errors
        }, status=status.HTTP_422_UNPROCESSABLE_ENTITY)

    product_ids = input_serializer.validated_data['order']['product_ids']

    try:
        result = OrderIntakeService.place_order(request.user, product_ids)
    except OrderPersistenceError as e:
        logger.exception(f"🔥 [Orders API] Order creation failed: {e}")
        return Response({
            'errors': {'detail': 'Order creation failed'}
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if result.is_err():
        log_security_event(
            'order_rejected',
            {'user_id': request.user.pk, **result.error.as_dict()},
            request_ip=get_safe_client_ip(request),
        )
        return Response({
            'errors': result.error.as_dict()
        }, status=status.HTTP_422_UNPROCESSABLE_ENTITY)

    order = result.unwrap()
    serializer = OrderSerializer(order, context={'include': _requested_includes(request, 'products')})
    return Response(serializer.data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
@throttle_classes([OrderListThrottle])
def order_detail(request: Request, order_id: int) -> Response:
    """
    One of the caller's orders, with its products embedded.
    """
    result = OrderQueryService.get_order(request.user, order_id)
    if result.is_err():
        return Response({
            'errors': {'detail': 'Order not found'}
        }, status=status.HTTP_404_NOT_FOUND)

    serializer = OrderSerializer(
        result.unwrap(), context={'include': _requested_includes(request, 'products')}
    )
    return Response(serializer.data)
