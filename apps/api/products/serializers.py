"""
Product API Serializers
"""

from rest_framework import serializers

from apps.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Catalog entry, also embedded in order responses"""

    price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = ['id', 'title', 'price', 'published', 'user_id', 'created_at']
