"""
Tests for request tracing and security event logging
"""

from django.http import HttpRequest, HttpResponse
from django.test import RequestFactory, SimpleTestCase, override_settings

from apps.common.middleware import REQUEST_ID_HEADER, RequestIDMiddleware
from apps.common.request_ip import get_safe_client_ip
from apps.common.validators import log_security_event


class RequestIDMiddlewareTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()
        self.seen: list[HttpRequest] = []

        def view(request: HttpRequest) -> HttpResponse:
            self.seen.append(request)
            return HttpResponse('ok')

        self.middleware = RequestIDMiddleware(view)

    def test_generates_request_id(self):
        response = self.middleware(self.factory.get('/api/orders/'))

        request_id = response[REQUEST_ID_HEADER]
        self.assertEqual(len(request_id), 36)
        self.assertEqual(self.seen[0].META['REQUEST_ID'], request_id)

    def test_reuses_upstream_request_id(self):
        request = self.factory.get('/api/orders/', HTTP_X_REQUEST_ID='proxy-123')

        response = self.middleware(request)

        self.assertEqual(response[REQUEST_ID_HEADER], 'proxy-123')
        self.assertEqual(self.seen[0].META['REQUEST_ID'], 'proxy-123')


class SecurityEventLoggingTests(SimpleTestCase):
    def test_event_logged_at_warning(self):
        with self.assertLogs('apps.common.validators', level='WARNING') as captured:
            log_security_event('order_created', {'order_id': 7}, request_ip='203.0.113.10')

        self.assertIn('order_created', captured.output[0])
        self.assertIn('203.0.113.10', captured.output[0])


class SafeClientIPTests(SimpleTestCase):
    """Forwarded headers are honored only from trusted proxies"""

    def setUp(self):
        self.factory = RequestFactory()

    @override_settings(IPWARE_TRUSTED_PROXY_LIST=[])
    def test_remote_addr_without_trusted_proxies(self):
        request = self.factory.get('/', REMOTE_ADDR='203.0.113.10', HTTP_X_FORWARDED_FOR='198.51.100.7')
        self.assertEqual(get_safe_client_ip(request), '203.0.113.10')

    @override_settings(IPWARE_TRUSTED_PROXY_LIST=['10.0.0.0/8'])
    def test_forwarded_client_behind_trusted_proxy(self):
        request = self.factory.get('/', REMOTE_ADDR='10.0.0.2', HTTP_X_FORWARDED_FOR='203.0.113.10')
        self.assertEqual(get_safe_client_ip(request), '203.0.113.10')

    @override_settings(IPWARE_TRUSTED_PROXY_LIST=['10.0.0.0/8'])
    def test_forwarded_header_from_untrusted_peer_ignored(self):
        request = self.factory.get('/', REMOTE_ADDR='198.51.100.20', HTTP_X_FORWARDED_FOR='203.0.113.10')
        self.assertEqual(get_safe_client_ip(request), '198.51.100.20')

    @override_settings(IPWARE_TRUSTED_PROXY_LIST=['10.0.0.5'])
    def test_single_proxy_address(self):
        request = self.factory.get('/', REMOTE_ADDR='10.0.0.5', HTTP_X_FORWARDED_FOR='203.0.113.10')
        self.assertEqual(get_safe_client_ip(request), '203.0.113.10')

    def test_missing_remote_addr_falls_back(self):
        request = self.factory.get('/')
        request.META.pop('REMOTE_ADDR', None)
        self.assertEqual(get_safe_client_ip(request), '127.0.0.1')
