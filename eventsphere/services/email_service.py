"""
Email Service
Transactional emails to participants and organizers
"""

import html
import logging
import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from eventsphere.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending emails"""

    @staticmethod
    async def send_email(to_email: str, subject: str, text_body: str, html_body: str) -> bool:
        """
        Send a multipart email

        Without SMTP credentials the message is only logged (development mode).

        Returns:
            True if the email was sent or logged, False if delivery failed
        """
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = settings.EMAIL_FROM
        message["To"] = to_email
        message.attach(MIMEText(text_body, "plain"))
        message.attach(MIMEText(html_body, "html"))

        if not (settings.SMTP_HOST and settings.SMTP_USER and settings.SMTP_PASSWORD):
            logger.info("Email (development mode) to=%s subject=%r\n%s", to_email, subject, text_body.strip())
            return True

        try:
            async with aiosmtplib.SMTP(hostname=settings.SMTP_HOST, port=settings.SMTP_PORT) as smtp:
                await smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                await smtp.sendmail(settings.EMAIL_FROM, to_email, message.as_string())
            return True
        except (aiosmtplib.SMTPException, OSError):
            logger.warning("Email send failed to=%s subject=%r", to_email, subject, exc_info=True)
            return False

    @staticmethod
    async def send_certificate_ready_email(
        participant_email: str,
        participant_name: str,
        event_title: str,
        certificate_id: str,
        verification_code: str
    ) -> bool:
        """Tell a participant their certificate can be downloaded"""
        subject = f"Your certificate for {event_title} is ready"
        verify_url = f"{settings.APP_URL}/api/certificates/verify?code={verification_code}"
        safe_name = html.escape(participant_name)
        safe_title = html.escape(event_title)

        html_body = f"""
        <html>
          <body style="font-family: Arial, sans-serif; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
              <h2 style="color: #2c3e50;">Congratulations, {safe_name}!</h2>
              <p>Your certificate for <strong>{safe_title}</strong> has been issued.</p>
              <div style="background-color: #f8f9fa; padding: 15px; border-left: 4px solid #007bff; margin: 20px 0;">
                <p>Certificate ID: <code>{certificate_id}</code></p>
                <p>Verification code: <code>{verification_code}</code></p>
              </div>
              <p>Anyone can confirm it at <a href="{verify_url}">{verify_url}</a>.</p>
              <p>Best regards,<br><strong>{settings.APP_NAME} Team</strong></p>
            </div>
          </body>
        </html>
        """

        text_body = f"""
Congratulations, {participant_name}!

Your certificate for {event_title} has been issued.

Certificate ID: {certificate_id}
Verification code: {verification_code}

Verify it at: {verify_url}

Best regards,
{settings.APP_NAME} Team
        """

        return await EmailService.send_email(participant_email, subject, text_body, html_body)

    @staticmethod
    async def send_organizer_approved_email(organizer_email: str, organizer_name: str) -> bool:
        """Tell an organizer their account can now sign in"""
        subject = f"Your {settings.APP_NAME} organizer account is approved"
        safe_name = html.escape(organizer_name)

        html_body = f"""
        <html>
          <body style="font-family: Arial, sans-serif; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
              <h2 style="color: #2c3e50;">Welcome aboard, {safe_name}!</h2>
              <p>An administrator approved your organizer account. You can now sign in and create events.</p>
              <p>
                <a href="{settings.APP_URL}/login" style="background-color: #007bff; color: white; padding: 10px 20px; text-decoration: none; border-radius: 5px; display: inline-block;">
                  Sign in to {settings.APP_NAME}
                </a>
              </p>
            </div>
          </body>
        </html>
        """

        text_body = f"""
Welcome aboard, {organizer_name}!

An administrator approved your organizer account. You can now sign in and create events.

Sign in: {settings.APP_URL}/login
        """

        return await EmailService.send_email(organizer_email, subject, text_body, html_body)


# Create singleton instance
email_service = EmailService()
