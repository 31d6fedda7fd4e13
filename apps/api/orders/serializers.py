"""
Order API Serializers
Order representations and the order creation payload.
"""

from typing import Any

from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.api.products.serializers import ProductSerializer
from apps.orders.models import Order
from apps.orders.services import MAX_PRODUCT_ID

User = get_user_model()

# Related resources a client may ask to embed with ?include=
INCLUDABLE_RELATIONS = frozenset({'products', 'user'})


class UserSummarySerializer(serializers.ModelSerializer):
    """Purchaser info embedded with ?include=user"""

    class Meta:
        model = User
        fields = ['id', 'email']


class OrderSerializer(serializers.ModelSerializer):
    """
    Order with its total and placed product ids.
    Related resources are embedded when named in the 'include' context entry.
    """

    total = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    product_ids = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = ['id', 'total', 'user_id', 'product_ids', 'created_at']

    def get_product_ids(self, obj: Order) -> list[int]:
        return [placement.product_id for placement in obj.placements.all()]

    def to_representation(self, instance: Order) -> dict[str, Any]:
        data = super().to_representation(instance)
        include = self.context.get('include', frozenset())

        if 'products' in include:
            products = [placement.product for placement in instance.placements.all()]
            data['products'] = ProductSerializer(products, many=True).data
        if 'user' in include:
            data['user'] = UserSummarySerializer(instance.user).data

        return data


# Input Serializers for Order Creation

class OrderPlacementInputSerializer(serializers.Serializer):
    """Inner 'order' object; only product ids are accepted, any total is dropped"""

    product_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1, max_value=MAX_PRODUCT_ID),
        allow_empty=True,
    )


class OrderCreateInputSerializer(serializers.Serializer):
    """Input serializer for order creation: {"order": {"product_ids": [...]}}"""

    order = OrderPlacementInputSerializer()
