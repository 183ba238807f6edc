# ============================================
# comments/selectors/comment.py
# ============================================
from django.db.models import QuerySet
from comments.models import Comment


class CommentSelector:

    @staticmethod
    def get_comments_by_page(page_id: int) -> QuerySet:
        """All comments of a page, newest first (ties: highest id first)"""
        return Comment.objects.filter(page_id=page_id).order_by('-created_at', '-id')
