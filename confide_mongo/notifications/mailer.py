"""
Mail transport: renders package email templates and sends them over SMTP.
"""
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Any, Callable, Optional, Protocol

from jinja2 import Environment, PackageLoader, StrictUndefined

from confide_mongo.config import Settings

logger = logging.getLogger("confide_mongo.mail")


@dataclass
class MailEnvelope:
    """Addressing of one outgoing message, filled in by the sender's callback."""
    recipient: Optional[str] = None
    subject: Optional[str] = None
    sender: Optional[str] = None


EnvelopeCallback = Callable[[MailEnvelope], None]


class Mailer(Protocol):
    """Mail-sending collaborator."""

    def send(self, template: str, params: dict[str, Any], configure: EnvelopeCallback) -> None: ...


def template_environment() -> Environment:
    """Jinja environment over the templates shipped in the package."""
    return Environment(
        loader=PackageLoader("confide_mongo", "templates"),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


class SmtpMailer:
    """Mailer rendering jinja templates and delivering through smtplib."""

    def __init__(self, settings: Settings, environment: Optional[Environment] = None):
        self.settings = settings
        self.environment = environment or template_environment()

    def render(self, template: str, params: dict[str, Any]) -> str:
        return self.environment.get_template(template).render(**params)

    def build_message(
        self,
        template: str,
        params: dict[str, Any],
        configure: EnvelopeCallback,
    ) -> EmailMessage:
        """
        Render a template into a message addressed by ``configure``.

        Raises:
            ValueError: If the callback left the envelope without a recipient
        """
        envelope = MailEnvelope(sender=self.settings.mail_from)
        configure(envelope)
        if not envelope.recipient:
            raise ValueError(f"No recipient set for email '{template}'")

        message = EmailMessage()
        message["From"] = envelope.sender
        message["To"] = envelope.recipient
        message["Subject"] = envelope.subject or ""
        message.set_content(self.render(template, params))
        return message

    def send(self, template: str, params: dict[str, Any], configure: EnvelopeCallback) -> None:
        message = self.build_message(template, params, configure)

        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port) as server:
                if self.settings.smtp_starttls:
                    server.starttls()
                if self.settings.smtp_username:
                    server.login(self.settings.smtp_username, self.settings.smtp_password or "")
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send '{template}' to {message['To']}: {e}")
            raise

        logger.info(f"Email '{template}' sent to {message['To']}")
