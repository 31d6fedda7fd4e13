"""
HTTP tests for /api/orders/
"""

from decimal import Decimal
from unittest.mock import patch

from django.core import mail
from django.db import DatabaseError
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from apps.orders.models import Order, Placement
from tests.factories.core_factories import (
    OrderCreationRequest,
    ProductCreationRequest,
    UserCreationRequest,
    create_order,
    create_product,
    create_user,
)


class OrderAPITestBase(TestCase):
    def setUp(self) -> None:
        self.client = APIClient()
        self.buyer = create_user(UserCreationRequest(email='buyer@marketplace.test'))
        self.other = create_user(UserCreationRequest(email='other@marketplace.test'))
        seller = create_user(UserCreationRequest(email='seller@marketplace.test'))
        self.p1 = create_product(ProductCreationRequest(user=seller, title='Keyboard', price=Decimal('10.00')))
        self.p2 = create_product(ProductCreationRequest(user=seller, title='Mouse', price=Decimal('15.00')))

        self.list_url = reverse('api:orders:order_list')

    def detail_url(self, order_id: int) -> str:
        return reverse('api:orders:order_detail', kwargs={'order_id': order_id})


class OrderAPIAuthenticationTests(OrderAPITestBase):
    """Unauthenticated requests never reach the services"""

    def test_list_requires_authentication(self) -> None:
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, 403)

    def test_detail_requires_authentication(self) -> None:
        order = create_order(OrderCreationRequest(user=self.buyer, products=[self.p1]))

        response = self.client.get(self.detail_url(order.pk))
        self.assertEqual(response.status_code, 403)

    def test_create_requires_authentication(self) -> None:
        response = self.client.post(
            self.list_url, {'order': {'product_ids': [self.p1.pk]}}, format='json'
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(len(mail.outbox), 0)


class OrderListAPITests(OrderAPITestBase):
    """GET /api/orders/"""

    def test_lists_only_callers_orders(self) -> None:
        first = create_order(OrderCreationRequest(user=self.buyer, products=[self.p1]))
        second = create_order(OrderCreationRequest(user=self.buyer, products=[self.p1, self.p2]))
        create_order(OrderCreationRequest(user=self.other, products=[self.p2]))
        self.client.force_authenticate(user=self.buyer)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['count'], 2)
        self.assertEqual([order['id'] for order in data['results']], [first.pk, second.pk])
        self.assertEqual(data['results'][1]['total'], '25.00')
        self.assertEqual(data['results'][1]['product_ids'], [self.p1.pk, self.p2.pk])

    def test_empty_history(self) -> None:
        self.client.force_authenticate(user=self.buyer)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'results': [], 'count': 0})

    def test_response_carries_request_id(self) -> None:
        self.client.force_authenticate(user=self.buyer)

        response = self.client.get(self.list_url)
        self.assertTrue(response['X-Request-ID'])


class OrderDetailAPITests(OrderAPITestBase):
    """GET /api/orders/<id>/"""

    def setUp(self) -> None:
        super().setUp()
        self.order = create_order(OrderCreationRequest(user=self.buyer, products=[self.p1, self.p2]))

    def test_own_order_with_products(self) -> None:
        self.client.force_authenticate(user=self.buyer)

        response = self.client.get(self.detail_url(self.order.pk))

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['id'], self.order.pk)
        self.assertEqual(data['total'], '25.00')
        self.assertEqual(data['user_id'], self.buyer.pk)
        self.assertEqual([product['title'] for product in data['products']], ['Keyboard', 'Mouse'])
        self.assertEqual(data['products'][0]['price'], '10.00')
        self.assertNotIn('user', data)

    def test_include_user(self) -> None:
        self.client.force_authenticate(user=self.buyer)

        response = self.client.get(self.detail_url(self.order.pk), {'include': 'user'})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['user'], {'id': self.buyer.pk, 'email': 'buyer@marketplace.test'})
        self.assertIn('products', data)

    def test_other_users_order_is_not_found(self) -> None:
        self.client.force_authenticate(user=self.other)

        response = self.client.get(self.detail_url(self.order.pk))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'errors': {'detail': 'Order not found'}})

    def test_missing_order_is_not_found(self) -> None:
        self.client.force_authenticate(user=self.buyer)

        response = self.client.get(self.detail_url(self.order.pk + 1000))
        self.assertEqual(response.status_code, 404)


class OrderCreateAPITests(OrderAPITestBase):
    """POST /api/orders/"""

    def setUp(self) -> None:
        super().setUp()
        self.client.force_authenticate(user=self.buyer)

    def test_create_order_computes_total(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                self.list_url, {'order': {'product_ids': [self.p1.pk, self.p2.pk]}}, format='json'
            )

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['total'], '25.00')
        self.assertEqual(data['user_id'], self.buyer.pk)
        self.assertEqual(len(data['products']), 2)

        order = Order.objects.get(pk=data['id'])
        self.assertEqual(order.total, Decimal('25.00'))
        self.assertEqual(order.placements.count(), 2)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ['buyer@marketplace.test'])

    def test_client_total_is_ignored(self) -> None:
        response = self.client.post(
            self.list_url,
            {'order': {'product_ids': [self.p1.pk, self.p2.pk], 'total': '50.00'}, 'total': '50.00'},
            format='json',
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['total'], '25.00')
        self.assertEqual(Order.objects.get().total, Decimal('25.00'))

    def test_duplicate_product_ids(self) -> None:
        response = self.client.post(
            self.list_url, {'order': {'product_ids': [self.p1.pk, self.p1.pk]}}, format='json'
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['total'], '20.00')
        self.assertEqual(response.json()['product_ids'], [self.p1.pk, self.p1.pk])

    def test_empty_order(self) -> None:
        response = self.client.post(self.list_url, {'order': {'product_ids': []}}, format='json')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['total'], '0.00')
        self.assertEqual(response.json()['products'], [])

    def test_unknown_product_is_unprocessable(self) -> None:
        missing_id = self.p2.pk + 1000

        response = self.client.post(
            self.list_url, {'order': {'product_ids': [self.p1.pk, missing_id]}}, format='json'
        )

        self.assertEqual(response.status_code, 422)
        errors = response.json()['errors']
        self.assertEqual(errors['kind'], 'product_not_found')
        self.assertEqual(errors['product_id'], missing_id)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(Placement.objects.count(), 0)
        self.assertEqual(len(mail.outbox), 0)

    def test_out_of_range_product_id_is_unprocessable(self) -> None:
        response = self.client.post(
            self.list_url, {'order': {'product_ids': [self.p1.pk, 2**70]}}, format='json'
        )

        self.assertEqual(response.status_code, 422)
        self.assertIn('product_ids', response.json()['errors']['order'])
        self.assertEqual(Order.objects.count(), 0)

    @override_settings(IPWARE_TRUSTED_PROXY_LIST=['10.0.0.0/8'])
    def test_rejection_audit_records_forwarded_client_ip(self) -> None:
        with self.assertLogs('apps.common.validators', level='WARNING') as captured:
            response = self.client.post(
                self.list_url,
                {'order': {'product_ids': [self.p2.pk + 1000]}},
                format='json',
                REMOTE_ADDR='10.0.0.2',
                HTTP_X_FORWARDED_FOR='203.0.113.10',
            )

        self.assertEqual(response.status_code, 422)
        self.assertIn('order_rejected', captured.output[0])
        self.assertIn('203.0.113.10', captured.output[0])

    def test_malformed_body_is_unprocessable(self) -> None:
        for body in ({}, {'order': {}}, {'order': {'product_ids': 'abc'}}, {'order': {'product_ids': ['x']}}):
            with self.subTest(body=body):
                response = self.client.post(self.list_url, body, format='json')
                self.assertEqual(response.status_code, 422)
                self.assertIn('errors', response.json())

        self.assertEqual(Order.objects.count(), 0)

    def test_persistence_failure_is_server_error(self) -> None:
        with patch.object(Placement.objects, 'bulk_create', side_effect=DatabaseError('disk full')):
            response = self.client.post(
                self.list_url, {'order': {'product_ids': [self.p1.pk]}}, format='json'
            )

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'errors': {'detail': 'Order creation failed'}})
        self.assertEqual(Order.objects.count(), 0)

    def test_new_order_appears_in_history(self) -> None:
        created = self.client.post(
            self.list_url, {'order': {'product_ids': [self.p1.pk]}}, format='json'
        ).json()

        listed = self.client.get(self.list_url).json()
        self.assertEqual([order['id'] for order in listed['results']], [created['id']])
