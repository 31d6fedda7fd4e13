"""
Client IP detection for the Marketplace API

Proxy headers are honored only when the direct connection comes from a proxy
listed in IPWARE_TRUSTED_PROXY_LIST. Otherwise REMOTE_ADDR is used, so a client
cannot spoof its address in audit logs by sending X-Forwarded-For itself.

Usage:
    from apps.common.request_ip import get_safe_client_ip

    client_ip = get_safe_client_ip(request)
"""

import ipaddress

from django.conf import settings
from django.http import HttpRequest
from ipware import get_client_ip

FALLBACK_IP = '127.0.0.1'


def _is_trusted_proxy(ip: str, trusted_proxies: list[str]) -> bool:
    """Check if an IP address is in the trusted proxy list (single IPs or CIDR ranges)"""
    try:
        ip_addr = ipaddress.ip_address(ip)
    except ValueError:
        return False

    for proxy in trusted_proxies:
        try:
            if ip_addr in ipaddress.ip_network(proxy, strict=False):
                return True
        except ValueError:
            continue
    return False


def get_safe_client_ip(request: HttpRequest) -> str:
    """
    Real client IP address, respecting the trusted proxy configuration.

    - Dev/test: IPWARE_TRUSTED_PROXY_LIST = [] and REMOTE_ADDR is always used
    - Prod: list the load balancer CIDRs; forwarded headers are read only
      when the request arrives from one of them
    """
    trusted_proxies = getattr(settings, 'IPWARE_TRUSTED_PROXY_LIST', [])
    remote_addr = request.META.get('REMOTE_ADDR') or FALLBACK_IP

    if not trusted_proxies or not _is_trusted_proxy(remote_addr, trusted_proxies):
        return remote_addr

    client_ip, _routable = get_client_ip(request)
    return client_ip or remote_addr
