# ============================================
# comments/urls.py
# ============================================
from django.urls import path
from comments.views.comment import (
    CommentListCreateAPIView,
    CommentDetailAPIView
)

app_name = 'comments'

urlpatterns = [
    path('pages/<int:page_id>/comments/', CommentListCreateAPIView.as_view(), name='comment-list-create'),
    path('comments/<int:comment_id>/', CommentDetailAPIView.as_view(), name='comment-detail'),
]
