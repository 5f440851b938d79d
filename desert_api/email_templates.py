"""
MJML Email Templates
Customer-facing emails for quotations, datasheets, photo addenda and payments.
Every MJML template has a plain text twin used as the text alternative.
"""

from html import escape
from typing import Optional

from . import config

# Desert Solutions theme colors - Indigo/Slate color scheme
THEME = {
    "primary": "#4338ca",
    "heading": "#2c3e50",
    "background": "#f8fafc",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e0e0e0",
}

CONFIDENTIALITY_NOTICE = (
    "This email and any attachments are confidential and intended solely for the addressee."
)


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    footer_lines: Optional[list[str]] = None,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section background-color="#ffffff" padding="0 40px 24px 40px">
          <mj-column>
            <mj-button
              href="{escape(cta_url)}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              border-radius="5px"
              padding="10px 20px"
              align="left">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    footer_text = "<br/>".join(footer_lines or [CONFIDENTIALITY_NOTICE])

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="Arial, sans-serif" />
          <mj-text font-size="15px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}" width="600px">
        <mj-section background-color="#ffffff" padding="32px 40px 8px 40px">
          <mj-column>
            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section background-color="#ffffff" padding="0 40px 32px 40px">
          <mj-column>
            <mj-divider border-color="{THEME['border']}" border-width="1px" padding="12px 0" />
            <mj-text font-size="11px" color="{THEME['text_muted']}" padding="0">
              {footer_text}
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def status_badge(status_label: str, status_color: str) -> str:
    """Inline badge next to the heading; empty for final releases"""
    if not status_label:
        return ""
    return (
        f'<span style="background-color: {status_color}; color: #ffffff; padding: 4px 12px; '
        f"border-radius: 4px; font-size: 12px; font-weight: bold; margin-left: 10px; "
        f'vertical-align: middle;">{status_label}</span>'
    )


def heading(title: str, status_label: str = "", status_color: str = "") -> str:
    return f"""
    <mj-text font-size="22px" font-weight="600" color="{THEME['primary']}" padding="0 0 16px 0">
      {title} {status_badge(status_label, status_color)}
    </mj-text>
    """


def summary_section(section_title: str, rows: list[tuple[str, str]]) -> str:
    lines = "<br/>".join(f"<strong>{label}:</strong> {value}" for label, value in rows)
    return f"""
    <mj-text font-size="17px" font-weight="600" color="{THEME['heading']}" padding="16px 0 4px 0">
      {section_title}
    </mj-text>
    <mj-text padding="0 0 16px 0">
      {lines}
    </mj-text>
    """


def sales_signature() -> str:
    return f"""
    <mj-text>
      Best regards,<br/>
      <strong>{config.QUOTATION_SALES_CONTACT}</strong><br/>
      Sales Director, {config.QUOTATION_COMPANY_NAME}<br/>
      <a href="mailto:{config.QUOTATION_COMPANY_EMAIL}">{config.QUOTATION_COMPANY_EMAIL}</a><br/>
      <a href="{config.QUOTATION_COMPANY_WEBSITE}">{config.QUOTATION_COMPANY_WEBSITE}</a>
    </mj-text>
    """


def sales_signature_text() -> str:
    return (
        "Best regards,\n"
        f"{config.QUOTATION_SALES_CONTACT}\n"
        f"Sales Director, {config.QUOTATION_COMPANY_NAME}\n"
        f"{config.QUOTATION_COMPANY_EMAIL}\n"
        f"{config.QUOTATION_COMPANY_WEBSITE}"
    )


def _message_block(message: Optional[str]) -> str:
    if not message:
        return ""
    return f"<mj-text>{escape(message)}</mj-text>"


def _message_text(message: Optional[str]) -> str:
    return f"{message}\n\n" if message else ""


def _summary_text(section_title: str, rows: list[tuple[str, str]]) -> str:
    lines = "\n".join(f"- {label}: {value}" for label, value in rows)
    return f"{section_title}:\n{lines}"


def _title_with_status(title: str, status_label: str) -> str:
    return f"{title} [{status_label}]" if status_label else title


# ============================================
# Quotation
# ============================================


def quotation_email_template(
    salutation: str,
    summary_rows: list[tuple[str, str]],
    status_label: str = "",
    status_color: str = "",
    message: Optional[str] = None,
) -> str:
    """Quotation email with the summary table, PDF goes as an attachment"""
    rows = [(label, escape(value)) for label, value in summary_rows]
    content = f"""
    {heading("Quotation", status_label, status_color)}
    <mj-text>Dear {escape(salutation)},</mj-text>
    <mj-text>
      Thank you for your interest in {config.QUOTATION_COMPANY_NAME}. Please find attached your
      quotation with detailed pricing and specifications for the requested equipment.
    </mj-text>
    {summary_section("Quotation Summary", rows)}
    {_message_block(message)}
    <mj-text>
      If you have any questions or would like to proceed with your order, please don't hesitate to contact us.
    </mj-text>
    {sales_signature()}
    """
    return get_base_template(
        title="Quotation",
        preview_text=f"Your quotation from {config.QUOTATION_COMPANY_NAME}",
        content_sections=content,
        footer_lines=[
            CONFIDENTIALITY_NOTICE,
            "If you have received this email in error, please notify the sender immediately and delete this email.",
        ],
    )


def quotation_email_text(
    salutation: str,
    summary_rows: list[tuple[str, str]],
    status_label: str = "",
    message: Optional[str] = None,
) -> str:
    return f"""{_title_with_status("Quotation", status_label)}

Dear {salutation},

Thank you for your interest in {config.QUOTATION_COMPANY_NAME}. Please find attached your quotation with detailed pricing and specifications for the requested equipment.

{_summary_text("Quotation Summary", summary_rows)}

{_message_text(message)}If you have any questions or would like to proceed with your order, please don't hesitate to contact us.

{sales_signature_text()}

{CONFIDENTIALITY_NOTICE}"""


# ============================================
# Datasheet
# ============================================


def datasheet_email_template(
    salutation: str,
    product_name: str,
    summary_rows: list[tuple[str, str]],
    status_label: str = "",
    status_color: str = "",
    message: Optional[str] = None,
) -> str:
    rows = [(escape(label), escape(value)) for label, value in summary_rows]
    content = f"""
    {heading("Product Datasheet", status_label, status_color)}
    <mj-text>Dear {escape(salutation)},</mj-text>
    <mj-text>
      Please find attached the technical datasheet for <strong>{escape(product_name)}</strong>.
    </mj-text>
    {_message_block(message)}
    {summary_section("Product Information", rows)}
    <mj-text>
      The attached PDF contains comprehensive technical specifications, key features, and product details.
    </mj-text>
    <mj-text>
      If you have any questions or would like a formal quotation, please don't hesitate to contact us.
    </mj-text>
    {sales_signature()}
    """
    return get_base_template(
        title="Product Datasheet",
        preview_text=f"Datasheet for {escape(product_name)}",
        content_sections=content,
        footer_lines=[CONFIDENTIALITY_NOTICE, "Specifications are subject to change without notice."],
    )


def datasheet_email_text(
    salutation: str,
    product_name: str,
    summary_rows: list[tuple[str, str]],
    status_label: str = "",
    message: Optional[str] = None,
) -> str:
    return f"""{_title_with_status("Product Datasheet", status_label)}

Dear {salutation},

Please find attached the technical datasheet for {product_name}.

{_message_text(message)}{_summary_text("Product Information", summary_rows)}

The attached PDF contains comprehensive technical specifications, key features, and product details.

If you have any questions or would like a formal quotation, please don't hesitate to contact us.

{sales_signature_text()}

{CONFIDENTIALITY_NOTICE}
Specifications are subject to change without notice."""


# ============================================
# Photo addendum
# ============================================


def _photos_footer() -> str:
    return (
        f"Photos are property of {config.QUOTATION_COMPANY_NAME} "
        "and may not be redistributed without permission."
    )


def photo_addendum_email_template(
    salutation: str,
    product_names: str,
    summary_rows: list[tuple[str, str]],
    status_label: str = "",
    status_color: str = "",
    message: Optional[str] = None,
) -> str:
    rows = [(label, escape(value)) for label, value in summary_rows]
    content = f"""
    {heading("Product Photo Addendum", status_label, status_color)}
    <mj-text>Dear {escape(salutation)},</mj-text>
    <mj-text>Please find attached the product photo addendum for {escape(product_names)}.</mj-text>
    {_message_block(message)}
    {summary_section("Photo Summary", rows)}
    <mj-text>
      These photos provide detailed views of the equipment including product overviews,
      technical details, and installation examples.
    </mj-text>
    <mj-text>
      If you have any questions about the products shown, please don't hesitate to contact us.
    </mj-text>
    {sales_signature()}
    """
    return get_base_template(
        title="Product Photo Addendum",
        preview_text=f"Product photos for {escape(product_names)}",
        content_sections=content,
        footer_lines=[CONFIDENTIALITY_NOTICE, _photos_footer()],
    )


def photo_addendum_email_text(
    salutation: str,
    product_names: str,
    summary_rows: list[tuple[str, str]],
    status_label: str = "",
    message: Optional[str] = None,
) -> str:
    return f"""{_title_with_status("Product Photo Addendum", status_label)}

Dear {salutation},

Please find attached the product photo addendum for {product_names}.

{_message_text(message)}{_summary_text("Photo Summary", summary_rows)}

These photos provide detailed views of the equipment including product overviews, technical details, and installation examples.

If you have any questions about the products shown, please don't hesitate to contact us.

{sales_signature_text()}

{CONFIDENTIALITY_NOTICE}
{_photos_footer()}"""


# ============================================
# Payment notifications (webhook driven)
# ============================================

TEAM_SIGNATURE = f"Best regards,<br/>{config.QUOTATION_COMPANY_NAME} Team"


def _team_signature_text() -> str:
    return f"Best regards,\n{config.QUOTATION_COMPANY_NAME} Team"


def payment_confirmed_template(
    customer_name: str, invoice_number: str, amount: str, payment_date: str
) -> str:
    content = f"""
    {heading("Payment Confirmed")}
    <mj-text>Dear {escape(customer_name)},</mj-text>
    <mj-text>Thank you! We have received your payment for invoice {invoice_number}.</mj-text>
    <mj-text>
      <strong>Amount Paid:</strong> {amount}<br/>
      <strong>Payment Date:</strong> {payment_date}
    </mj-text>
    <mj-text>Your order is now being processed. We will notify you when it ships.</mj-text>
    <mj-text>If you have any questions, please don't hesitate to contact us.</mj-text>
    <mj-text>{TEAM_SIGNATURE}</mj-text>
    """
    return get_base_template(
        title="Payment Confirmed",
        preview_text=f"Payment received for invoice {invoice_number}",
        content_sections=content,
    )


def payment_confirmed_text(
    customer_name: str, invoice_number: str, amount: str, payment_date: str
) -> str:
    return f"""Payment Confirmed

Dear {customer_name},

Thank you! We have received your payment for invoice {invoice_number}.

Amount Paid: {amount}
Payment Date: {payment_date}

Your order is now being processed. We will notify you when it ships.

{_team_signature_text()}"""


def payment_failed_template(
    customer_name: str, invoice_number: str, amount: str, reason: str, payment_url: Optional[str]
) -> str:
    content = f"""
    {heading("Payment Failed")}
    <mj-text>Dear {escape(customer_name)},</mj-text>
    <mj-text>We were unable to process your payment for invoice {invoice_number}.</mj-text>
    <mj-text>
      <strong>Amount Due:</strong> {amount}<br/>
      <strong>Reason:</strong> {escape(reason)}
    </mj-text>
    <mj-text>Please update your payment method and try again:</mj-text>
    """
    return get_base_template(
        title="Payment Failed",
        preview_text=f"Payment failed for invoice {invoice_number}",
        content_sections=content,
        cta_url=payment_url,
        cta_label="Pay Invoice",
        footer_lines=[
            "If you need assistance, please contact us.",
            f"Best regards, {config.QUOTATION_COMPANY_NAME} Team",
        ],
    )


def payment_failed_text(
    customer_name: str, invoice_number: str, amount: str, reason: str, payment_url: Optional[str]
) -> str:
    return f"""Payment Failed

Dear {customer_name},

We were unable to process your payment for invoice {invoice_number}.

Amount Due: {amount}
Reason: {reason}

Please update your payment method and try again:
{payment_url or ""}

{_team_signature_text()}"""


def payment_overdue_template(
    customer_name: str,
    invoice_number: str,
    days_past_due: int,
    amount: str,
    due_date: str,
    payment_url: Optional[str],
) -> str:
    content = f"""
    {heading("Payment Reminder")}
    <mj-text>Dear {escape(customer_name)},</mj-text>
    <mj-text>
      This is a friendly reminder that invoice {invoice_number} is now {days_past_due} day(s) overdue.
    </mj-text>
    <mj-text>
      <strong>Amount Due:</strong> {amount}<br/>
      <strong>Due Date:</strong> {due_date}
    </mj-text>
    <mj-text>Please submit payment as soon as possible to avoid any service interruptions:</mj-text>
    """
    return get_base_template(
        title="Payment Reminder",
        preview_text=f"Invoice {invoice_number} is overdue",
        content_sections=content,
        cta_url=payment_url,
        cta_label="Pay Invoice",
        footer_lines=[
            "If you have already submitted payment, please disregard this notice.",
            "If you need to discuss payment arrangements, please contact us immediately.",
            f"Best regards, {config.QUOTATION_COMPANY_NAME} Team",
        ],
    )


def payment_overdue_text(
    customer_name: str,
    invoice_number: str,
    days_past_due: int,
    amount: str,
    due_date: str,
    payment_url: Optional[str],
) -> str:
    return f"""Payment Reminder

Dear {customer_name},

This is a friendly reminder that invoice {invoice_number} is now {days_past_due} day(s) overdue.

Amount Due: {amount}
Due Date: {due_date}

Please submit payment as soon as possible:
{payment_url or ""}

If you have already submitted payment, please disregard this notice.

{_team_signature_text()}"""
