# ============================================
# pages/models/page.py
# ============================================
from django.db import models


class Page(models.Model):
    path = models.CharField(max_length=255, db_index=True)
    locale_code = models.CharField(max_length=5, default='en')
    title = models.CharField(max_length=255)
    description = models.CharField(max_length=255, blank=True)
    content = models.TextField(blank=True)
    render = models.TextField(blank=True)  # rendered HTML body
    extra = models.JSONField(default=dict, blank=True)  # metadata bag, includes "comment" snapshot
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'pages'
        ordering = ['path']
        constraints = [
            models.UniqueConstraint(fields=['locale_code', 'path'], name='uniq_page_locale_path'),
        ]

    def __str__(self):
        return f"{self.locale_code}/{self.path}"
