"""
Notifications - mail transport, message catalog and lifecycle notifiers.
"""
from confide_mongo.notifications.mailer import MailEnvelope, Mailer, SmtpMailer
from confide_mongo.notifications.notifier import MailNotifier, NullNotifier, UserNotifier
from confide_mongo.notifications.translator import CatalogTranslator, Translator

__all__ = [
    "MailEnvelope",
    "Mailer",
    "SmtpMailer",
    "MailNotifier",
    "NullNotifier",
    "UserNotifier",
    "CatalogTranslator",
    "Translator",
]
