# ============================================
# comments/models/comment.py
# ============================================
from django.conf import settings
from django.db import models
from django.utils import timezone


class Comment(models.Model):
    page = models.ForeignKey(
        'pages.Page',
        on_delete=models.CASCADE,
        related_name='comments'
    )
    reply_to = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='replies'
    )
    content = models.TextField()
    render = models.TextField(blank=True)
    # null for guest authors, who are identified by name + email only
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='comments'
    )
    name = models.CharField(max_length=255, blank=True)
    email = models.CharField(max_length=255, blank=True)
    ip = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        db_table = 'comments'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['page', 'created_at'], name='comments_page_created_idx'),
        ]
        permissions = [
            ('write_comments', 'Can post comments'),
            ('manage_comments', 'Can edit and delete any comment'),
        ]

    def save(self, *args, **kwargs):
        if self._state.adding:
            self.updated_at = self.created_at
        else:
            self.updated_at = timezone.now()
        super().save(*args, **kwargs)

    @property
    def is_guest(self) -> bool:
        return self.author_id is None

    def __str__(self):
        return f"Comment #{self.pk} on page {self.page_id}"
