"""Message builders for the notification channels.

- Email: default HTML body rendered from a Jinja2 template when the caller
  did not supply one
- SMS: concise single-segment text (160 characters max)
- WhatsApp: free-form body or content-template variables
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, select_autoescape

from contract_service.features.notifications.schemas import NotificationPriority

if TYPE_CHECKING:
    from contract_service.features.notifications.schemas import NotificationContent

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
EMAIL_TEMPLATE = "notification_email.html"

SMS_MAX_LENGTH = 160
# Title and message are combined only when they fit comfortably in one segment
SMS_COMBINE_THRESHOLD = 150
WHATSAPP_PREVIEW_LENGTH = 50

PRIORITY_COLORS = {
    NotificationPriority.URGENT: "#dc2626",
    NotificationPriority.HIGH: "#ea580c",
    NotificationPriority.MEDIUM: "#f59e0b",
}
DEFAULT_PRIORITY_COLOR = "#6b7280"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def priority_color(priority: NotificationPriority) -> str:
    return PRIORITY_COLORS.get(priority, DEFAULT_PRIORITY_COLOR)


def render_email_html(content: NotificationContent) -> str:
    """Render the default HTML email body for content without its own HTML."""
    template = _env.get_template(EMAIL_TEMPLATE)
    return template.render(
        title=content.title,
        message=content.message,
        action_url=content.action_url,
        priority_color=priority_color(content.priority),
    )


def build_sms_message(content: NotificationContent) -> str:
    """Build a concise SMS body.

    The title always leads; the message is appended only when title and
    message together stay under the combine threshold, and the action URL
    is appended as " - View: <url>". The result is cut at 160 characters.
    """
    text = content.title
    if len(content.title) + len(content.message) < SMS_COMBINE_THRESHOLD:
        text = f"{text}: {content.message}"
    if content.action_url:
        text = f"{text} - View: {content.action_url}"
    return text[:SMS_MAX_LENGTH]


def with_business_name(body: str, business_name: str) -> str:
    """Prefix the business display name unless the body already mentions it."""
    if business_name in body:
        return body
    return f"{business_name}: {body}"


def build_whatsapp_variables(content: NotificationContent) -> str:
    """Content-template variables as the JSON string Twilio expects."""
    preview = content.message
    if len(preview) > WHATSAPP_PREVIEW_LENGTH:
        preview = preview[:WHATSAPP_PREVIEW_LENGTH] + "..."
    return json.dumps({"1": content.title, "2": preview})


__all__ = [
    "SMS_MAX_LENGTH",
    "build_sms_message",
    "build_whatsapp_variables",
    "priority_color",
    "render_email_html",
    "with_business_name",
]
