"""
Tests for the mailer, translator and notifiers.
"""

import smtplib

import pytest
from unittest.mock import MagicMock, patch


# =============================================================================
# Translator Tests
# =============================================================================

class TestCatalogTranslator:
    """Tests for CatalogTranslator."""

    def test_default_subjects(self, translator):
        from confide_mongo.notifications.translator import (
            ACCOUNT_CONFIRMATION_SUBJECT,
            PASSWORD_RESET_SUBJECT,
        )

        assert translator.get(ACCOUNT_CONFIRMATION_SUBJECT) == "Account Confirmation"
        assert translator.get(PASSWORD_RESET_SUBJECT) == "Password Reset"

    def test_overrides_and_unknown_keys(self):
        from confide_mongo.notifications.translator import CatalogTranslator, PASSWORD_RESET_SUBJECT

        translator = CatalogTranslator({PASSWORD_RESET_SUBJECT: "Réinitialisation"})

        assert translator.get(PASSWORD_RESET_SUBJECT) == "Réinitialisation"
        assert translator.get("unknown.key") == "unknown.key"


# =============================================================================
# Mailer Tests
# =============================================================================

class TestSmtpMailer:
    """Tests for SmtpMailer rendering and delivery."""

    def _configure(self, recipient="bob@sample.com", subject="Hello"):
        def configure(envelope):
            envelope.recipient = recipient
            envelope.subject = subject
        return configure

    def test_render_confirmation_template(self, settings):
        from confide_mongo.models.user import User
        from confide_mongo.notifications.mailer import SmtpMailer

        user = User(username="Bob", email="bob@sample.com", confirmation_code="abc123")

        body = SmtpMailer(settings).render(
            settings.email_account_confirmation,
            {"user": user, "app_url": "http://testserver"},
        )

        assert "Bob" in body
        assert "http://testserver/users/confirm/abc123" in body

    def test_render_reset_template(self, settings):
        from confide_mongo.models.user import User
        from confide_mongo.notifications.mailer import SmtpMailer

        user = User(email="bob@sample.com")

        body = SmtpMailer(settings).render(
            settings.email_reset_password,
            {"user": user, "token": "tok", "app_url": "http://testserver"},
        )

        assert "bob@sample.com" in body
        assert "http://testserver/users/reset_password/tok" in body

    def test_build_message(self, settings):
        from confide_mongo.models.user import User
        from confide_mongo.notifications.mailer import SmtpMailer

        message = SmtpMailer(settings).build_message(
            settings.email_account_confirmation,
            {"user": User(username="Bob", confirmation_code="c"), "app_url": "http://testserver"},
            self._configure(),
        )

        assert message["To"] == "bob@sample.com"
        assert message["From"] == "no-reply@sample.com"
        assert message["Subject"] == "Hello"

    def test_build_message_requires_recipient(self, settings):
        from confide_mongo.notifications.mailer import SmtpMailer

        with pytest.raises(ValueError):
            SmtpMailer(settings).build_message("emails/password_reset.txt", {}, self._configure(recipient=None))

    def test_send_uses_smtp(self, settings):
        from confide_mongo.models.user import User
        from confide_mongo.notifications.mailer import SmtpMailer

        smtp_settings = settings.model_copy(update={
            "smtp_starttls": True,
            "smtp_username": "mailer",
            "smtp_password": "pw",
        })
        params = {"user": User(email="bob@sample.com"), "token": "t", "app_url": "http://testserver"}

        with patch("confide_mongo.notifications.mailer.smtplib.SMTP") as smtp_cls:
            server = smtp_cls.return_value.__enter__.return_value
            SmtpMailer(smtp_settings).send("emails/password_reset.txt", params, self._configure())

        smtp_cls.assert_called_once_with(settings.smtp_host, settings.smtp_port)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "pw")
        server.send_message.assert_called_once()

    def test_send_failure_propagates(self, settings):
        from confide_mongo.models.user import User
        from confide_mongo.notifications.mailer import SmtpMailer

        params = {"user": User(email="bob@sample.com"), "token": "t", "app_url": "http://testserver"}

        with patch("confide_mongo.notifications.mailer.smtplib.SMTP") as smtp_cls:
            server = smtp_cls.return_value.__enter__.return_value
            server.send_message.side_effect = smtplib.SMTPRecipientsRefused({})

            with pytest.raises(smtplib.SMTPException):
                SmtpMailer(settings).send("emails/password_reset.txt", params, self._configure())


# =============================================================================
# Notifier Tests
# =============================================================================

class TestMailNotifier:
    """Tests for MailNotifier."""

    def test_account_created(self, mailer, translator, settings):
        from confide_mongo.models.user import User
        from confide_mongo.notifications.notifier import MailNotifier

        user = User(username="Bob", email="bob@sample.com", confirmation_code="c")

        MailNotifier(mailer, translator, settings).account_created(user)

        template, params, envelope = mailer.sent[0]
        assert template == settings.email_account_confirmation
        assert params == {"user": user, "app_url": "http://testserver"}
        assert envelope.recipient == "bob@sample.com"
        assert envelope.subject == "Account Confirmation"

    def test_password_reset(self, mailer, translator, settings):
        from confide_mongo.models.user import User
        from confide_mongo.notifications.notifier import MailNotifier

        user = User(email="bob@sample.com")

        MailNotifier(mailer, translator, settings).password_reset(user, "tok")

        template, params, envelope = mailer.sent[0]
        assert template == settings.email_reset_password
        assert params["token"] == "tok"
        assert envelope.subject == "Password Reset"

    def test_mailer_failure_propagates(self, translator, settings):
        from confide_mongo.models.user import User
        from confide_mongo.notifications.notifier import MailNotifier

        failing = MagicMock()
        failing.send.side_effect = OSError("connection refused")

        with pytest.raises(OSError):
            MailNotifier(failing, translator, settings).account_created(User(email="bob@sample.com"))

    def test_save_sends_confirmation_email(self, directory, reminders, mailer, translator, hasher, settings, user_factory):
        """Saving a new user through the service mails the confirmation link."""
        from confide_mongo.notifications.notifier import MailNotifier
        from confide_mongo.services.user_service import UserService

        service = UserService(directory, reminders, MailNotifier(mailer, translator, settings), hasher, translator)
        user = user_factory()

        assert service.save(user) is True

        assert len(mailer.sent) == 1
        _, params, envelope = mailer.sent[0]
        assert params["user"].confirmation_code == user.confirmation_code
        assert envelope.recipient == "bob@sample.com"


class TestNullNotifier:
    """Tests for NullNotifier."""

    def test_drops_events(self):
        from confide_mongo.models.user import User
        from confide_mongo.notifications.notifier import NullNotifier

        notifier = NullNotifier()

        assert notifier.account_created(User()) is None
        assert notifier.password_reset(User(), "t") is None
