# ============================================
# comments/authors.py
# ============================================
"""
Author identity of a comment.

A comment is written either by a registered user or by a guest who only
submits a display name and an email. The request subject is resolved into
one of the two variants once, when the comment service is entered.
"""
from dataclasses import dataclass
from typing import Optional, Union

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from comments.exceptions import InputInvalid

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255


@dataclass(frozen=True)
class RegisteredAuthor:
    user_id: int
    name: str
    email: str


@dataclass(frozen=True)
class GuestAuthor:
    name: str
    email: str


AuthorIdentity = Union[RegisteredAuthor, GuestAuthor]


def is_guest(user) -> bool:
    return user is None or not getattr(user, 'is_authenticated', False)


def _email_errors(email: str) -> list:
    if not email:
        return ["Email can't be blank"]
    errors = []
    try:
        validate_email(email.lower())
    except ValidationError:
        errors.append("Email is not a valid email")
    if len(email) > EMAIL_MAX_LENGTH:
        errors.append(f"Email is too long (maximum is {EMAIL_MAX_LENGTH} characters)")
    return errors


def _name_errors(name: str) -> list:
    if not name or not name.strip():
        return ["Name can't be blank"]
    if len(name) < NAME_MIN_LENGTH:
        return [f"Name is too short (minimum is {NAME_MIN_LENGTH} characters)"]
    if len(name) > NAME_MAX_LENGTH:
        return [f"Name is too long (maximum is {NAME_MAX_LENGTH} characters)"]
    return []


def validate_guest(name: Optional[str], email: Optional[str]) -> GuestAuthor:
    """
    Validate guest fields, email rules first.
    Length rules apply to the name as submitted; the stored name is trimmed.
    Raises InputInvalid with the first failing message.
    """
    name = name or ''
    email = (email or '').strip()
    errors = _email_errors(email) + _name_errors(name)
    if errors:
        raise InputInvalid(errors[0])
    return GuestAuthor(name=name.strip(), email=email)


def registered_author(user) -> RegisteredAuthor:
    full_name = user.get_full_name() if hasattr(user, 'get_full_name') else ''
    return RegisteredAuthor(
        user_id=user.pk,
        name=full_name or user.get_username(),
        email=user.email or '',
    )


def resolve_author(user, *, guest_name: Optional[str] = None, guest_email: Optional[str] = None) -> AuthorIdentity:
    """Registered identity for authenticated users, validated guest otherwise"""
    if is_guest(user):
        return validate_guest(guest_name, guest_email)
    return registered_author(user)


def resolve_actor(user) -> Optional[RegisteredAuthor]:
    """Identity of whoever edits/deletes; None for anonymous actors"""
    if is_guest(user):
        return None
    return registered_author(user)
