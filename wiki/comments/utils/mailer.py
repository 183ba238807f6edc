# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)


def mk_subject(subject: str) -> str:
    prefix = getattr(settings, "EMAIL_SUBJECT_PREFIX", "")
    return f"{prefix}{subject}" if prefix else subject


@dataclass
class MailMessage:
    to: List[str]
    subject: str
    template: str
    data: Dict[str, Any] = field(default_factory=dict)
    text: str = ""


class Mailer:

    @staticmethod
    def send(message: MailMessage) -> bool:
        """
        Render comments/email/<template>.html and send it with the text fallback.
        Never raises: failures are logged and False is returned.
        """
        tos = [e for e in (message.to or []) if e]
        if not tos:
            logger.warning("[mail] No recipients; skip.")
            return False

        from_email = getattr(settings, "DEFAULT_FROM_EMAIL", None) or getattr(settings, "SERVER_EMAIL", None)
        if not from_email:
            logger.warning("[mail] DEFAULT_FROM_EMAIL / SERVER_EMAIL not set; skip.")
            return False

        try:
            html_body = render_to_string(f"comments/email/{message.template}.html", message.data)
            msg = EmailMultiAlternatives(
                subject=mk_subject(message.subject),
                body=message.text,
                from_email=from_email,
                to=tos,
            )
            msg.attach_alternative(html_body, "text/html")
            msg.send(fail_silently=False)
        except Exception as ex:
            logger.warning("[mail] send failed (%s): %s", message.subject, ex)
            return False
        return True
