# views/utils.py
"""
Shared tooling for the comment APIViews:
- drf-spectacular helpers (error schema, path params, std_errors)
- CommentError -> Response translation
- client address of a request
"""
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, inline_serializer
from drf_spectacular.types import OpenApiTypes
from rest_framework import serializers, status
from rest_framework.response import Response

from comments.exceptions import (
    CommentError,
    CommentNotFound,
    ContentMissing,
    InputInvalid,
    ManageForbidden,
    PageNotFound,
    PostForbidden,
    ProviderFailure,
    ReadForbidden,
)

# ---- Reusable error schema
ErrorSerializer = inline_serializer(
    name="CommentError",
    fields={"error": serializers.CharField(), "code": serializers.CharField()}
)

ERROR_STATUS = {
    InputInvalid: status.HTTP_400_BAD_REQUEST,
    ContentMissing: status.HTTP_400_BAD_REQUEST,
    PageNotFound: status.HTTP_404_NOT_FOUND,
    CommentNotFound: status.HTTP_404_NOT_FOUND,
    PostForbidden: status.HTTP_403_FORBIDDEN,
    ManageForbidden: status.HTTP_403_FORBIDDEN,
    ReadForbidden: status.HTTP_403_FORBIDDEN,
    ProviderFailure: status.HTTP_502_BAD_GATEWAY,
}


def error_response(exc: CommentError) -> Response:
    return Response(
        {"error": exc.message, "code": exc.code},
        status=ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST),
    )


def client_ip(request):
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


# ---- Param helpers

def path_int(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.PATH, description=description)


def std_errors(extra: dict | None = None):
    """Standard error response mapping you can merge into responses=..."""
    errs = {
        400: OpenApiResponse(ErrorSerializer, description="Invalid input / content missing"),
        403: OpenApiResponse(ErrorSerializer, description="Forbidden"),
        404: OpenApiResponse(ErrorSerializer, description="Page or comment not found"),
        502: OpenApiResponse(ErrorSerializer, description="Storage provider failure"),
    }
    if extra:
        errs.update(extra)
    return errs
