"""
Tests for the Product model
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase

from apps.products.models import Product
from tests.factories.core_factories import ProductCreationRequest, UserCreationRequest, create_product, create_user


class ProductModelTests(TestCase):
    def setUp(self):
        self.seller = create_user(UserCreationRequest(email='seller@marketplace.test'))

    def test_unpublished_by_default(self):
        product = Product.objects.create(user=self.seller, title='Lamp', price=Decimal('5.00'))
        self.assertFalse(product.published)

    def test_published_queryset(self):
        listed = create_product(ProductCreationRequest(user=self.seller, title='Listed'))
        create_product(ProductCreationRequest(user=self.seller, title='Draft', published=False))

        self.assertEqual(list(Product.objects.published()), [listed])
        self.assertEqual(Product.objects.owned_by(self.seller.pk).count(), 2)

    def test_negative_price_fails_validation(self):
        product = Product(user=self.seller, title='Broken', price=Decimal('-1.00'))

        with self.assertRaises(ValidationError):
            product.full_clean()

    def test_negative_price_rejected_by_database(self):
        with self.assertRaises(IntegrityError), transaction.atomic():
            Product.objects.create(user=self.seller, title='Broken', price=Decimal('-1.00'))

    def test_deleting_seller_removes_products(self):
        create_product(ProductCreationRequest(user=self.seller))

        self.seller.delete()
        self.assertEqual(Product.objects.count(), 0)
