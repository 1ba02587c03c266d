import html
import logging
import smtplib
import ssl
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

from meditracker.core.config import settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the SMTP provider rejects or fails to deliver a message."""


class EmailConfigurationError(ValueError):
    """Raised when required SMTP settings are missing."""


class EmailService:
    def __init__(
        self,
        smtp_server: Optional[str] = None,
        smtp_port: Optional[int] = None,
        smtp_username: Optional[str] = None,
        smtp_password: Optional[str] = None,
        from_email: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.smtp_server = smtp_server or settings.SMTP_SERVER
        self.smtp_port = int(smtp_port or settings.SMTP_PORT)
        self.smtp_username = smtp_username or settings.SMTP_USERNAME
        self.smtp_password = smtp_password or settings.SMTP_PASSWORD
        self.from_email = from_email or settings.FROM_EMAIL or self.smtp_username
        self.timeout = timeout or settings.SMTP_TIMEOUT_SECONDS

        # Validate required email configuration
        missing = [
            name
            for name, value in (
                ("SMTP_SERVER", self.smtp_server),
                ("SMTP_USERNAME", self.smtp_username),
                ("SMTP_PASSWORD", self.smtp_password),
                ("FROM_EMAIL", self.from_email),
            )
            if not value
        ]
        if missing:
            raise EmailConfigurationError(f"Missing email configuration: {', '.join(missing)}")

    def send_email(self, to_email: str, subject: str, text_content: str) -> None:
        """
        Send a plaintext email with an HTML alternative.

        Raises EmailDeliveryError when the provider call fails.
        """
        msg = self.build_message(to_email, subject, text_content)
        self._send(msg, to_email)

    def build_message(self, to_email: str, subject: str, text_content: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to_email

        html_body = html.escape(text_content).replace("\n", "<br>")
        msg.attach(MIMEText(text_content, "plain"))
        msg.attach(MIMEText(f"<p>{html_body}</p>", "html"))
        return msg

    def _send(self, msg: MIMEMultipart, to_email: str) -> None:
        """Send email using SMTP (SSL on 465, STARTTLS otherwise)."""
        logger.debug(f"📧 [Email] Sending via {self.smtp_server}:{self.smtp_port} as {self.smtp_username}")
        context = ssl.create_default_context()
        try:
            if self.smtp_port == 465:
                with smtplib.SMTP_SSL(self.smtp_server, self.smtp_port, context=context, timeout=self.timeout) as server:
                    server.login(self.smtp_username, self.smtp_password)
                    server.send_message(msg)
            else:
                with smtplib.SMTP(self.smtp_server, self.smtp_port, timeout=self.timeout) as server:
                    server.starttls(context=context)
                    server.login(self.smtp_username, self.smtp_password)
                    server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"❌ [Email] Failed to send '{msg['Subject']}' to {to_email}: {e}")
            if "553" in str(e) or "relay" in str(e).lower():
                logger.error("💡 [Email] FROM_EMAIL usually has to match SMTP_USERNAME for this provider")
            raise EmailDeliveryError(str(e)) from e

        logger.info(f"✅ [Email] Sent '{msg['Subject']}' to {to_email}")
