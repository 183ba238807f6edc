# ============================================
# comments/exceptions.py
# ============================================
from typing import Optional


class CommentError(Exception):
    """Base of every error the comment services raise"""

    code = 'CommentError'
    default_message = 'Unexpected comment error.'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InputInvalid(CommentError):
    code = 'InputInvalid'
    default_message = 'Input data is invalid.'


class ContentMissing(CommentError):
    code = 'CommentContentMissing'
    default_message = 'Comment content is missing or too short.'


class PageNotFound(CommentError):
    code = 'PageNotFound'
    default_message = 'This page does not exist.'


class CommentNotFound(CommentError):
    code = 'CommentNotFound'
    default_message = 'This comment does not exist.'


class PostForbidden(CommentError):
    code = 'CommentPostForbidden'
    default_message = 'You are not authorized to post a comment on this page.'


class ManageForbidden(CommentError):
    code = 'CommentManageForbidden'
    default_message = 'You are not authorized to manage comments on this page.'


class ReadForbidden(CommentError):
    code = 'CommentReadForbidden'
    default_message = 'You are not authorized to view comments of this page.'


class ProviderFailure(CommentError):
    code = 'CommentProviderFailure'
    default_message = 'The comment storage provider failed.'
