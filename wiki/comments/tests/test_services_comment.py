import pytest
from unittest.mock import Mock, patch

from comments.exceptions import (
    CommentNotFound,
    ContentMissing,
    InputInvalid,
    ManageForbidden,
    PageNotFound,
    PostForbidden,
)
from comments.models import Comment
from comments.providers import CommentProvider
from comments.services.comment import CommentService


@pytest.fixture
def provider_mock(monkeypatch):
    provider = Mock(spec=CommentProvider)
    monkeypatch.setattr("comments.services.comment.get_comment_provider", lambda: provider)
    return provider


def _post(user, page_id=42, content="Hello world", **kwargs):
    return CommentService.create_comment(page_id=page_id, content=content, user=user, **kwargs)


# ---------- create ----------

@pytest.mark.django_db
def test_create_comment_end_to_end(user, page, search_index, mailoutbox, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        comment = _post(user, ip="10.0.0.7")

    assert len(callbacks) == 2
    assert comment.id is not None
    assert comment.created_at == comment.updated_at
    assert comment.content == "Hello world"
    assert comment.author_id == user.id
    assert comment.email == "writer@example.com"
    assert comment.ip == "10.0.0.7"

    page.refresh_from_db()
    assert page.extra["comment"][0] == "Hello world"
    assert page.extra["tags"] == ["docs"]

    search_index.assert_called_once()
    snapshot = search_index.call_args[0][0]
    assert snapshot["id"] == 42
    assert snapshot["extra"]["comment"][0] == "Hello world"

    assert len(mailoutbox) == 1
    assert mailoutbox[0].to == ["ops@example.com"]


@pytest.mark.django_db
@pytest.mark.parametrize("content", ["", "   ", "a", "  b  ", "\n\tc\n"])
def test_create_comment_content_too_short(user, page, provider_mock, content):
    with pytest.raises(ContentMissing):
        _post(user, content=content)
    provider_mock.create.assert_not_called()


@pytest.mark.django_db
def test_create_comment_trims_content(user, page, task_queue):
    comment = _post(user, content="   ok   ")
    assert comment.content == "ok"
    assert Comment.objects.get(id=comment.id).content == "ok"


@pytest.mark.django_db
def test_guest_with_invalid_email_is_rejected(guest, page):
    with pytest.raises(InputInvalid) as exc:
        _post(guest, guest_name="Jane Doe", guest_email="not-an-email")

    assert exc.value.message == "Email is not a valid email"
    assert Comment.objects.count() == 0


@pytest.mark.django_db
def test_guest_email_rule_wins_over_name_rule(guest, page):
    with pytest.raises(InputInvalid) as exc:
        _post(guest, guest_name="J", guest_email="broken@")
    assert exc.value.message == "Email is not a valid email"


@pytest.mark.django_db
@pytest.mark.parametrize("name, message", [
    ("", "Name can't be blank"),
    ("J", "Name is too short (minimum is 2 characters)"),
    ("x" * 256, "Name is too long (maximum is 255 characters)"),
])
def test_guest_name_rules(guest, page, name, message):
    with pytest.raises(InputInvalid) as exc:
        _post(guest, guest_name=name, guest_email="jane@example.com")
    assert exc.value.message == message


@pytest.mark.django_db
def test_guest_without_email_is_rejected(guest, page):
    with pytest.raises(InputInvalid) as exc:
        _post(guest, guest_name="Jane Doe")
    assert exc.value.message == "Email can't be blank"


@pytest.mark.django_db
def test_guest_comment_keeps_guest_identity(guest, page, task_queue, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        comment = _post(guest, guest_name="Jane Doe", guest_email="Jane@Example.com", ip="192.168.1.5")

    assert comment.author_id is None
    assert comment.is_guest
    assert comment.name == "Jane Doe"
    assert comment.email == "Jane@Example.com"

    assert task_queue.names() == ["index_page_comments", "notify_new_comment"]
    assert task_queue.items[1][1]["author_email"] == "Jane@Example.com"


@pytest.mark.django_db
def test_registered_user_ignores_guest_fields(user, page, task_queue):
    comment = _post(user, guest_name="Someone", guest_email="not-an-email")
    assert comment.author_id == user.id
    assert comment.name == "writer"


@pytest.mark.django_db
def test_create_forbidden_by_access_rule(settings, user, docs_page, provider_mock):
    settings.COMMENTS_ACCESS_RULES = [{"path": "/docs", "match": "START", "deny": ["write:comments"]}]

    with pytest.raises(PostForbidden):
        _post(user, page_id=docs_page.id, content="Perfectly valid content")
    provider_mock.create.assert_not_called()


@pytest.mark.django_db
def test_create_forbidden_for_guests_without_capability(settings, guest, page):
    settings.COMMENTS_GUEST_CAPABILITIES = ["read:comments"]

    with pytest.raises(PostForbidden):
        _post(guest, guest_name="Jane Doe", guest_email="jane@example.com")
    assert Comment.objects.count() == 0


@pytest.mark.django_db
def test_create_page_not_found(user, provider_mock):
    with pytest.raises(PageNotFound):
        _post(user, page_id=999)
    provider_mock.create.assert_not_called()


@pytest.mark.django_db
def test_create_reply_to_other_page_is_invalid(user, page, docs_page, task_queue):
    other = _post(user, page_id=docs_page.id, content="On docs")

    with pytest.raises(InputInvalid):
        _post(user, reply_to=other.id, content="Replying")

    reply_parent = _post(user, content="Parent")
    reply = _post(user, reply_to=reply_parent.id, content="Child")
    assert reply.reply_to_id == reply_parent.id


@pytest.mark.django_db
def test_create_schedules_effects_only_after_commit(user, page, task_queue, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=False) as callbacks:
        comment = _post(user)
        assert task_queue.items == []

    assert len(callbacks) == 2
    for callback in callbacks:
        callback()

    assert task_queue.names() == ["index_page_comments", "notify_new_comment"]
    assert task_queue.items[0][1] == {"page_id": 42}
    assert task_queue.items[1][1]["comment_id"] == comment.id


@pytest.mark.django_db
def test_post_commit_failure_does_not_fail_create(user, page, caplog, mailoutbox, django_capture_on_commit_callbacks):
    with patch("comments.tasks.IndexSyncService.run", side_effect=RuntimeError("search down")):
        with django_capture_on_commit_callbacks(execute=True):
            comment = _post(user)

    assert Comment.objects.filter(id=comment.id).exists()
    assert "Post-commit task index_page_comments failed" in caplog.text
    # notification is independent of the failed index sync
    assert len(mailoutbox) == 1


# ---------- update ----------

@pytest.mark.django_db
def test_update_comment_by_moderator(user, moderator, page, task_queue, mailoutbox, django_capture_on_commit_callbacks):
    comment = _post(user)

    with django_capture_on_commit_callbacks(execute=True):
        updated = CommentService.update_comment(comment_id=comment.id, content="Hi", user=moderator)

    assert updated.content == "Hi"
    assert updated.render == "<p>Hi</p>"
    assert updated.updated_at > comment.created_at
    assert updated.created_at == comment.created_at
    assert task_queue.names() == ["index_page_comments"]
    assert mailoutbox == []


@pytest.mark.django_db
def test_update_content_too_short(user, moderator, page, task_queue):
    comment = _post(user)
    with pytest.raises(ContentMissing):
        CommentService.update_comment(comment_id=comment.id, content=" x ", user=moderator)
    assert Comment.objects.get(id=comment.id).content == "Hello world"


@pytest.mark.django_db
def test_update_forbidden_without_manage(user, page, task_queue, django_capture_on_commit_callbacks):
    comment = _post(user)

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(ManageForbidden):
            CommentService.update_comment(comment_id=comment.id, content="Edited", user=user)

    assert callbacks == []
    assert Comment.objects.get(id=comment.id).content == "Hello world"


@pytest.mark.django_db
def test_update_comment_not_found(moderator, provider_mock):
    provider_mock.get_page_id_for_comment.return_value = None

    with pytest.raises(CommentNotFound):
        CommentService.update_comment(comment_id=123, content="Edited", user=moderator)
    provider_mock.update.assert_not_called()


@pytest.mark.django_db
def test_update_page_not_found(moderator, provider_mock):
    provider_mock.get_page_id_for_comment.return_value = 999

    with pytest.raises(PageNotFound):
        CommentService.update_comment(comment_id=123, content="Edited", user=moderator)
    provider_mock.update.assert_not_called()


# ---------- delete ----------

@pytest.mark.django_db
def test_delete_by_unauthorized_user(user, page, task_queue, django_capture_on_commit_callbacks):
    comment = _post(user)

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(ManageForbidden):
            CommentService.delete_comment(comment_id=comment.id, user=user)

    assert Comment.objects.filter(id=comment.id).exists()
    assert callbacks == []
    assert task_queue.items == []


@pytest.mark.django_db
def test_delete_by_guest_is_forbidden(user, guest, page, task_queue):
    comment = _post(user)
    with pytest.raises(ManageForbidden):
        CommentService.delete_comment(comment_id=comment.id, user=guest)


@pytest.mark.django_db
def test_delete_by_moderator(user, moderator, page, task_queue, django_capture_on_commit_callbacks):
    comment = _post(user)

    with django_capture_on_commit_callbacks(execute=True):
        CommentService.delete_comment(comment_id=comment.id, user=moderator, ip="10.0.0.9")

    assert not Comment.objects.filter(id=comment.id).exists()
    assert task_queue.names() == ["index_page_comments"]


@pytest.mark.django_db
def test_delete_by_superuser(user, admin, page, task_queue):
    comment = _post(user)
    CommentService.delete_comment(comment_id=comment.id, user=admin)
    assert not Comment.objects.filter(id=comment.id).exists()


@pytest.mark.django_db
@pytest.mark.parametrize("page_id, error", [(None, CommentNotFound), (999, PageNotFound)])
def test_delete_lookup_failures(moderator, provider_mock, page_id, error):
    provider_mock.get_page_id_for_comment.return_value = page_id

    with pytest.raises(error):
        CommentService.delete_comment(comment_id=5, user=moderator)
    provider_mock.remove.assert_not_called()


# ---------- list ----------

@pytest.mark.django_db
def test_list_comments_newest_first(user, page, task_queue):
    first = _post(user, content="First")
    second = _post(user, content="Second")

    comments = CommentService.list_comments(page_id=page.id, user=user)
    assert [c.id for c in comments] == [second.id, first.id]


@pytest.mark.django_db
def test_guest_name_length_counts_submitted_text(guest, page, task_queue):
    comment = _post(guest, guest_name=" J ", guest_email="jane@example.com")
    assert comment.name == "J"

    with pytest.raises(InputInvalid) as exc:
        _post(guest, guest_name="   ", guest_email="jane@example.com")
    assert exc.value.message == "Name can't be blank"


@pytest.mark.django_db
def test_comment_on_page_zero_is_not_reported_missing(moderator, provider_mock):
    provider_mock.get_page_id_for_comment.return_value = 0

    with pytest.raises(PageNotFound):
        CommentService.delete_comment(comment_id=5, user=moderator)
