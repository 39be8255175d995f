"""
Email Service using Resend

Sends owner alerts when a visitor submits a form through their QR code.
"""

import asyncio
import logging
import os
from html import escape

import resend

logger = logging.getLogger(__name__)

resend.api_key = os.getenv("RESEND_API_KEY")

EMAIL_FROM = os.getenv("EMAIL_FROM", "QR Intake <noreply@qrintake.dev>")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
) -> bool:
    """
    Send an email using Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML content of the email

    Returns:
        True if email was sent successfully
    """
    if not resend.api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {to_email} | SUBJECT: {subject}")
        return True

    try:
        params: resend.Emails.SendParams = {
            "from": EMAIL_FROM,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        # Resend's client is synchronous
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent successfully to {to_email}, id: {email['id']}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False


async def send_submission_alert(
    to_email: str,
    applicant_name: str,
    application_type: str,
) -> bool:
    """Tell an owner that a new form submission is waiting for review."""
    safe_applicant_name = escape(applicant_name)
    safe_application_type = escape(application_type)

    dashboard_url = f"{FRONTEND_URL}/dashboard/submissions"
    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 40px 20px; }}
            .header {{ color: #1a365d; margin-bottom: 24px; }}
            .button {{ display: inline-block; background-color: #1a365d; color: white; padding: 14px 28px; text-decoration: none; border-radius: 8px; margin: 24px 0; }}
            .footer {{ margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1 class="header">New Form Submission</h1>

            <p>You have received a new <strong>{safe_application_type}</strong> submission
            from <strong>{safe_applicant_name}</strong>.</p>

            <p>Review it in your dashboard:</p>

            <a href="{dashboard_url}" class="button">Open Dashboard</a>

            <div class="footer">
                <p>You are receiving this because a visitor scanned your QR code.</p>
                <p>QR Intake</p>
            </div>
        </div>
    </body>
    </html>
    """
    return await send_email(
        to_email=to_email,
        subject="New Form Submission Received",
        html_content=html_content,
    )
