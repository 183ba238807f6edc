# ============================================
# comments/providers/base.py
# ============================================
"""
Contract for comment storage backends.

The comment service never writes comment rows itself; it goes through the
provider configured in COMMENTS_PROVIDER. Every mutating call must be atomic.
"""
import abc
from typing import Optional

from comments.authors import AuthorIdentity, RegisteredAuthor
from comments.models import Comment
from pages.models import Page


class CommentProvider(abc.ABC):

    @abc.abstractmethod
    def create(
        self,
        *,
        page: Page,
        reply_to: Optional[int],
        content: str,
        author: AuthorIdentity,
        ip: Optional[str] = None
    ) -> Comment:
        """Persist a new comment and return it"""

    @abc.abstractmethod
    def update(
        self,
        *,
        id: int,
        content: str,
        page: Page,
        author: Optional[RegisteredAuthor],
        ip: Optional[str] = None
    ) -> Comment:
        """Replace the content of an existing comment"""

    @abc.abstractmethod
    def remove(
        self,
        *,
        id: int,
        page: Page,
        author: Optional[RegisteredAuthor],
        ip: Optional[str] = None
    ) -> None:
        """Delete a comment"""

    @abc.abstractmethod
    def get_page_id_for_comment(self, id: int) -> Optional[int]:
        """Owning page id of a comment, None when the comment does not exist"""
