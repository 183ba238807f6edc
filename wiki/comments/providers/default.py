# ============================================
# comments/providers/default.py
# ============================================
import logging
from typing import Optional

from django.db import DatabaseError, transaction
from django.utils.html import linebreaks

from comments.authors import AuthorIdentity, RegisteredAuthor
from comments.exceptions import CommentNotFound, InputInvalid, ProviderFailure
from comments.models import Comment
from comments.providers.base import CommentProvider
from pages.models import Page

logger = logging.getLogger(__name__)


def render_content(content: str) -> str:
    """Escaped HTML with paragraphs / line breaks"""
    return linebreaks(content, autoescape=True)


class DefaultCommentProvider(CommentProvider):
    """Comments stored in the local `comments` table"""

    def create(
        self,
        *,
        page: Page,
        reply_to: Optional[int],
        content: str,
        author: AuthorIdentity,
        ip: Optional[str] = None
    ) -> Comment:
        try:
            with transaction.atomic():
                parent = None
                if reply_to:
                    parent = Comment.objects.filter(id=reply_to, page=page).first()
                    if parent is None:
                        raise InputInvalid("Reply target does not exist on this page")

                comment = Comment.objects.create(
                    page=page,
                    reply_to=parent,
                    content=content,
                    render=render_content(content),
                    author_id=author.user_id if isinstance(author, RegisteredAuthor) else None,
                    name=author.name,
                    email=author.email,
                    ip=ip or None,
                )
        except DatabaseError as e:
            raise ProviderFailure(str(e)) from e

        logger.info("Comment %s created on page %s", comment.id, page.id)
        return comment

    def update(
        self,
        *,
        id: int,
        content: str,
        page: Page,
        author: Optional[RegisteredAuthor],
        ip: Optional[str] = None
    ) -> Comment:
        try:
            with transaction.atomic():
                comment = Comment.objects.select_for_update().filter(id=id, page=page).first()
                if comment is None:
                    raise CommentNotFound()
                comment.content = content
                comment.render = render_content(content)
                comment.save(update_fields=['content', 'render', 'updated_at'])
        except DatabaseError as e:
            raise ProviderFailure(str(e)) from e

        logger.info(
            "Comment %s updated by %s",
            id, f"user {author.user_id}" if author else f"guest ({ip or 'unknown'})"
        )
        return comment

    def remove(
        self,
        *,
        id: int,
        page: Page,
        author: Optional[RegisteredAuthor],
        ip: Optional[str] = None
    ) -> None:
        try:
            with transaction.atomic():
                deleted, _ = Comment.objects.filter(id=id, page=page).delete()
        except DatabaseError as e:
            raise ProviderFailure(str(e)) from e

        if not deleted:
            raise CommentNotFound()
        logger.info(
            "Comment %s removed by %s",
            id, f"user {author.user_id}" if author else f"guest ({ip or 'unknown'})"
        )

    def get_page_id_for_comment(self, id: int) -> Optional[int]:
        return Comment.objects.filter(id=id).values_list('page_id', flat=True).first()
