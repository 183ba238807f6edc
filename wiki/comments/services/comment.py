# ============================================
# comments/services/comment.py
# ============================================
from typing import List, Optional

from comments import tasks
from comments.authorization import AccessContext, Capability, get_authorization_gate
from comments.authors import resolve_actor, resolve_author
from comments.exceptions import (
    CommentNotFound,
    ContentMissing,
    ManageForbidden,
    PageNotFound,
    PostForbidden,
    ReadForbidden,
)
from comments.models import Comment
from comments.providers import get_comment_provider
from comments.selectors.comment import CommentSelector
from pages.models import Page
from pages.selectors.page import PageSelector

CONTENT_MIN_LENGTH = 2


class CommentService:

    @staticmethod
    def _clean_content(content: Optional[str]) -> str:
        content = (content or '').strip()
        if len(content) < CONTENT_MIN_LENGTH:
            raise ContentMissing()
        return content

    @staticmethod
    def _load_page(page_id: int) -> Page:
        page = PageSelector.get_page_by_id(page_id)
        if page is None:
            raise PageNotFound()
        return page

    @staticmethod
    def _check_access(user, page: Page, capability: Capability) -> bool:
        context = AccessContext(path=page.path, locale=page.locale_code)
        return get_authorization_gate().check(user, {capability}, context)

    @staticmethod
    def _load_managed_page(comment_id: int, user) -> Page:
        """Owning page of a comment the user is allowed to manage"""
        page_id = get_comment_provider().get_page_id_for_comment(comment_id)
        if page_id is None:
            raise CommentNotFound()

        page = CommentService._load_page(page_id)
        if not CommentService._check_access(user, page, Capability.MANAGE_COMMENTS):
            raise ManageForbidden()
        return page

    @staticmethod
    def create_comment(
        *,
        page_id: int,
        content: str,
        user,
        ip: Optional[str] = None,
        reply_to: Optional[int] = None,
        guest_name: Optional[str] = None,
        guest_email: Optional[str] = None
    ) -> Comment:
        """Post a new comment on a page"""

        author = resolve_author(user, guest_name=guest_name, guest_email=guest_email)
        content = CommentService._clean_content(content)

        page = CommentService._load_page(page_id)
        if not CommentService._check_access(user, page, Capability.WRITE_COMMENTS):
            raise PostForbidden()

        comment = get_comment_provider().create(
            page=page,
            reply_to=reply_to,
            content=content,
            author=author,
            ip=ip
        )

        # Post-commit: search index + notification, never awaited here
        tasks.enqueue_on_commit(tasks.index_page_comments, page_id=page.id)
        tasks.enqueue_on_commit(
            tasks.notify_new_comment,
            page_id=page.id,
            comment_id=comment.id,
            content=comment.content,
            author_email=comment.email
        )

        return comment

    @staticmethod
    def update_comment(
        *,
        comment_id: int,
        content: str,
        user,
        ip: Optional[str] = None
    ) -> Comment:
        """Update the content of a comment"""

        content = CommentService._clean_content(content)
        page = CommentService._load_managed_page(comment_id, user)

        comment = get_comment_provider().update(
            id=comment_id,
            content=content,
            page=page,
            author=resolve_actor(user),
            ip=ip
        )

        tasks.enqueue_on_commit(tasks.index_page_comments, page_id=page.id)

        return comment

    @staticmethod
    def delete_comment(*, comment_id: int, user, ip: Optional[str] = None) -> None:
        """Delete a comment"""

        page = CommentService._load_managed_page(comment_id, user)

        get_comment_provider().remove(
            id=comment_id,
            page=page,
            author=resolve_actor(user),
            ip=ip
        )

        tasks.enqueue_on_commit(tasks.index_page_comments, page_id=page.id)

    @staticmethod
    def list_comments(*, page_id: int, user) -> List[Comment]:
        """Comments of a page, newest first"""

        page = CommentService._load_page(page_id)
        if not CommentService._check_access(user, page, Capability.READ_COMMENTS):
            raise ReadForbidden()

        return list(CommentSelector.get_comments_by_page(page.id))
