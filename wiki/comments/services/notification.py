# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
from typing import Optional

from django.conf import settings
from django.utils.text import Truncator

from comments.exceptions import PageNotFound
from comments.utils.mailer import Mailer, MailMessage
from pages.models import Page
from pages.selectors.page import PageSelector

log = logging.getLogger(__name__)

EXCERPT_LENGTH = 200
TEMPLATE_NEW_COMMENT = "new-comment"


def build_page_link(page: Page) -> str:
    host = (getattr(settings, "WIKI_HOST", "") or "").rstrip("/")
    return f"{host}/{page.locale_code}/{page.path.lstrip('/')}"


class NotificationService:

    @staticmethod
    def recipients() -> list:
        """Single operational address, not the page watchers"""
        email = getattr(settings, "COMMENTS_NOTIFY_EMAIL", "")
        return [email] if email else []

    @staticmethod
    def notify_new_comment(
        *, page_id: int, content: str, author_email: str, comment_id: Optional[int] = None
    ) -> bool:
        page = PageSelector.get_page_by_id(page_id)
        if page is None:
            raise PageNotFound()

        tos = NotificationService.recipients()
        if not tos:
            log.warning("COMMENTS_NOTIFY_EMAIL not set; no notification for page %s.", page_id)
            return False

        page_link = build_page_link(page)
        page_ref = f"'{page.title}'"
        author = author_email or "A guest"

        message = MailMessage(
            to=tos,
            subject=f"New comment on {page.title}",
            template=TEMPLATE_NEW_COMMENT,
            data={
                "preheadertext": f"New comment on {page_ref}",
                "title": f"{author} commented on {page_ref}.",
                "content": Truncator(content).chars(EXCERPT_LENGTH),
                "buttonLink": page_link,
                "buttonText": f"Open {page_ref}",
            },
            text=f"A new comment was added to {page_ref}. More information: {page_link}",
        )
        sent = Mailer.send(message)
        if sent:
            log.info("New comment notification sent for page %s, comment %s", page_id, comment_id)
        else:
            log.warning("New comment notification failed for page %s, comment %s", page_id, comment_id)
        return sent
