"""
Notification Services for the Marketplace API
Renders and sends transactional emails through Django's configured email backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

from apps.common.types import EmailAddress

if TYPE_CHECKING:
    from apps.orders.models import Order

logger = logging.getLogger(__name__)

ORDER_CONFIRMATION_SUBJECT = "Order Confirmation"
ORDER_CONFIRMATION_TEMPLATE = "notifications/order_confirmation"

# ===============================================================================
# DATA CLASSES
# ===============================================================================


@dataclass
class EmailResult:
    """Result of an email sending operation."""

    success: bool
    recipient: EmailAddress
    subject: str
    sent_count: int = 0


# ===============================================================================
# EMAIL SERVICE
# ===============================================================================


class EmailService:
    """
    Transactional email service.

    Transport errors are raised to the caller. Callers that treat an email
    as best-effort (order intake) catch and log them.
    """

    @staticmethod
    def _send_email(recipient: EmailAddress, subject: str, body: str, html_body: str | None = None) -> int:
        """Send one message using Django's email backend"""
        email = EmailMultiAlternatives(
            subject=subject,
            body=body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[recipient],
        )

        if html_body:
            email.attach_alternative(html_body, "text/html")

        return email.send(fail_silently=False)

    @staticmethod
    def build_order_confirmation_context(order: Order) -> dict[str, Any]:
        """Template context: the order, its products in placement order, and their count"""
        products = [placement.product for placement in order.placements.select_related('product').order_by('id')]
        return {
            'order': order,
            'user': order.user,
            'products': products,
            'product_count': len(products),
        }

    @classmethod
    def send_order_confirmation(cls, order: Order) -> EmailResult:
        """Send the order confirmation to the purchaser"""
        recipient = order.user.email
        context = cls.build_order_confirmation_context(order)

        body = render_to_string(f"{ORDER_CONFIRMATION_TEMPLATE}.txt", context)
        html_body = render_to_string(f"{ORDER_CONFIRMATION_TEMPLATE}.html", context)

        sent_count = cls._send_email(recipient, ORDER_CONFIRMATION_SUBJECT, body, html_body)
        logger.info(f"📧 [Email] Sent order confirmation for order #{order.pk} to {recipient}")

        return EmailResult(
            success=sent_count > 0,
            recipient=recipient,
            subject=ORDER_CONFIRMATION_SUBJECT,
            sent_count=sent_count,
        )
