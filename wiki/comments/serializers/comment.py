# ============================================
# comments/serializers/comment.py
# ============================================
from rest_framework import serializers
from comments.models import Comment


class CommentCreateSerializer(serializers.Serializer):
    # length rules are enforced by CommentService
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)
    reply_to = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    guest_name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    guest_email = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class CommentUpdateSerializer(serializers.Serializer):
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class CommentOutputSerializer(serializers.ModelSerializer):
    page_id = serializers.IntegerField(read_only=True)
    reply_to_id = serializers.IntegerField(read_only=True, allow_null=True)
    author_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Comment
        fields = [
            'id', 'page_id', 'reply_to_id', 'author_id', 'name',
            'content', 'render', 'created_at', 'updated_at',
        ]
