# ============================================
# comments/views/comment.py
# ============================================
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiResponse
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from comments.exceptions import CommentError
from comments.serializers.comment import (
    CommentCreateSerializer,
    CommentUpdateSerializer,
    CommentOutputSerializer
)
from comments.services.comment import CommentService
from .utils import client_ip, error_response, path_int, std_errors


@extend_schema_view(
    get=extend_schema(
        tags=["Comments"],
        summary="List comments of a page (newest first)",
        parameters=[path_int("page_id", "Page ID")],
        responses={200: CommentOutputSerializer(many=True), **std_errors()},
    ),
    post=extend_schema(
        tags=["Comments"],
        summary="Post a comment on a page",
        description="Guests (not logged in) must send `guest_name` and `guest_email`.",
        parameters=[path_int("page_id", "Page ID")],
        request=CommentCreateSerializer,
        responses={201: CommentOutputSerializer, **std_errors()},
    ),
)
class CommentListCreateAPIView(APIView):
    """
    GET: List comments for a page
    POST: Create a comment

    Path params:
    - page_id: int

    Request body (POST):
    - content: string (required, >= 2 chars once trimmed)
    - reply_to: int (optional)
    - guest_name / guest_email: string (guests only)
    """

    def get(self, request, page_id):
        try:
            comments = CommentService.list_comments(page_id=page_id, user=request.user)
        except CommentError as e:
            return error_response(e)

        serializer = CommentOutputSerializer(comments, many=True)
        return Response(serializer.data)

    def post(self, request, page_id):
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            comment = CommentService.create_comment(
                page_id=page_id,
                user=request.user,
                ip=client_ip(request),
                **serializer.validated_data
            )
        except CommentError as e:
            return error_response(e)

        output_serializer = CommentOutputSerializer(comment)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)


@extend_schema_view(
    put=extend_schema(
        tags=["Comments"],
        summary="Update comment content",
        parameters=[path_int("comment_id", "Comment ID")],
        request=CommentUpdateSerializer,
        responses={200: CommentOutputSerializer, **std_errors()},
    ),
    delete=extend_schema(
        tags=["Comments"],
        summary="Delete comment",
        parameters=[path_int("comment_id", "Comment ID")],
        responses={204: OpenApiResponse(None, description="Deleted"), **std_errors()},
    ),
)
class CommentDetailAPIView(APIView):
    """
    PUT: Update comment
    DELETE: Delete comment

    Path params:
    - comment_id: int
    """

    def put(self, request, comment_id):
        serializer = CommentUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            updated_comment = CommentService.update_comment(
                comment_id=comment_id,
                user=request.user,
                ip=client_ip(request),
                **serializer.validated_data
            )
        except CommentError as e:
            return error_response(e)

        output_serializer = CommentOutputSerializer(updated_comment)
        return Response(output_serializer.data)

    def delete(self, request, comment_id):
        try:
            CommentService.delete_comment(
                comment_id=comment_id,
                user=request.user,
                ip=client_ip(request)
            )
        except CommentError as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)
