import pytest
from unittest.mock import patch
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser, Permission

from comments import tasks
from pages.models import Page

User = get_user_model()


class RecordingTaskQueue(tasks.TaskQueue):
    """Keeps work items instead of running them"""

    def __init__(self):
        self.items = []

    def enqueue(self, func, **kwargs):
        self.items.append((func, kwargs))

    def names(self):
        return [func.__name__ for func, _ in self.items]


@pytest.fixture(autouse=True)
def comment_settings(settings):
    settings.COMMENTS_TASK_QUEUE = "comments.tasks.ImmediateTaskQueue"
    settings.COMMENTS_NOTIFY_EMAIL = "ops@example.com"
    settings.WIKI_HOST = "https://wiki.example.com"
    settings.SEARCH_SERVICE_URL = ""
    settings.DEFAULT_FROM_EMAIL = "wiki@example.com"
    settings.EMAIL_SUBJECT_PREFIX = "[wiki] "
    settings.COMMENTS_GUEST_CAPABILITIES = ["read:comments", "write:comments"]
    settings.COMMENTS_USER_CAPABILITIES = ["read:comments", "write:comments"]
    settings.COMMENTS_ACCESS_RULES = []
    return settings


@pytest.fixture
def task_queue(monkeypatch):
    queue = RecordingTaskQueue()
    monkeypatch.setattr(tasks, "get_task_queue", lambda: queue)
    return queue


@pytest.fixture
def search_index():
    with patch("comments.services.index_sync.SearchIndexClient.upsert", return_value=True) as upsert:
        yield upsert


@pytest.fixture
def user(db):
    return User.objects.create_user(username="writer", password="pass", email="writer@example.com")


@pytest.fixture
def moderator(db):
    mod = User.objects.create_user(username="moderator", password="pass", email="mod@example.com")
    mod.user_permissions.add(
        Permission.objects.get(codename="manage_comments", content_type__app_label="comments")
    )
    # fresh instance, no cached permissions
    return User.objects.get(pk=mod.pk)


@pytest.fixture
def admin(db):
    return User.objects.create_user(username="root", password="pass", is_staff=True, is_superuser=True)


@pytest.fixture
def guest():
    return AnonymousUser()


@pytest.fixture
def page(db):
    return Page.objects.create(
        id=42, path="/a", locale_code="en", title="Intro",
        render="<h1>Intro</h1><p>Hello &amp; welcome</p>",
        extra={"tags": ["docs"]},
    )


@pytest.fixture
def docs_page(db):
    return Page.objects.create(path="/docs/intro", locale_code="en", title="Docs intro", render="<p>Docs</p>")
