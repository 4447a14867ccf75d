"""Channel senders for notification delivery.

Each sender delivers one message to one recipient through one channel:
- ResendEmailSender: transactional email
- TwilioSmsSender: SMS
- TwilioWhatsAppSender: WhatsApp (free-form or content template)
- InAppSender: notification-center row in the database
"""

from __future__ import annotations

from .base import ChannelSender
from .batch import send_in_batches
from .email import ResendEmailSender
from .in_app import InAppSender
from .phone import is_valid_phone, normalize_phone
from .sms import TwilioSmsSender
from .whatsapp import TwilioWhatsAppSender

__all__ = [
    "ChannelSender",
    "InAppSender",
    "ResendEmailSender",
    "TwilioSmsSender",
    "TwilioWhatsAppSender",
    "is_valid_phone",
    "normalize_phone",
    "send_in_batches",
]
