"""
Email Service using Resend
Email bodies are authored as MJML templates and compiled to responsive HTML
"""

import logging
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from . import config
from .exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


def get_sender_address(display_name: Optional[str] = None) -> str:
    """Sales contact display name with the company address"""
    name = display_name or config.QUOTATION_SALES_CONTACT
    return f"{name} <{config.QUOTATION_COMPANY_EMAIL}>"


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
        # mjml_to_html returns a dict-like with 'html' and 'errors' keys
        if isinstance(result, dict):
            if result.get("errors"):
                logger.warning(f"MJML compilation warnings: {result['errors']}")
            return result.get("html", "")
        return str(result)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise EmailDeliveryError(f"Failed to compile MJML template: {str(e)}") from e


def build_attachments(attachments: Optional[list[dict]]) -> list[dict]:
    """Convert {filename, content: bytes, content_type} dicts to Resend attachments"""
    return [
        {
            "filename": attachment["filename"],
            "content": list(attachment["content"]),
            "content_type": attachment.get("content_type", "application/octet-stream"),
        }
        for attachment in attachments or []
    ]


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    text: Optional[str] = None,
    from_address: Optional[str] = None,
    cc: Optional[list[str]] = None,
    bcc: Optional[list[str]] = None,
    attachments: Optional[list[dict]] = None,
) -> dict:
    """
    Send an email through Resend

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        text: Plain text alternative
        from_address: Optional custom from address
        cc: Optional carbon copy recipients
        bcc: Optional blind carbon copy recipients
        attachments: Optional list of {filename, content, content_type}

    Returns:
        Send response dict
    """
    if not config.RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise EmailDeliveryError("Email service not configured")

    html_content = compile_mjml_to_html(mjml_content)

    recipients = [to] if isinstance(to, str) else to
    sender = from_address or get_sender_address()

    email_data = {
        "from": sender,
        "to": recipients,
        "subject": subject,
        "html": html_content,
    }
    if text:
        email_data["text"] = text
    if cc:
        email_data["cc"] = cc
    if bcc:
        email_data["bcc"] = bcc
    if attachments:
        email_data["attachments"] = build_attachments(attachments)

    try:
        resend.api_key = config.RESEND_API_KEY
        logger.info(f"📧 Sending email via Resend to: {recipients}")
        response = resend.Emails.send(email_data)
        logger.info(f"✅ Email sent successfully via Resend: {response}")
        return response
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise EmailDeliveryError(f"Failed to send email: {str(e)}") from e
