# ============================================
# comments/authorization.py
# ============================================
"""
Capability checks for comment actions.

    gate = get_authorization_gate()
    gate.check(request.user, {Capability.WRITE_COMMENTS}, AccessContext(path=page.path, locale=page.locale_code))

The default gate combines Django permissions with the COMMENTS_* capability
settings and an optional list of path/locale deny rules:

    COMMENTS_ACCESS_RULES = [
        {"path": "internal", "match": "START", "locales": ["en"], "deny": ["write:comments"]},
    ]
"""
import enum
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class Capability(str, enum.Enum):
    READ_COMMENTS = 'read:comments'
    WRITE_COMMENTS = 'write:comments'
    MANAGE_COMMENTS = 'manage:comments'

    @property
    def permission(self) -> str:
        """Django permission granting this capability, e.g. comments.write_comments"""
        action = self.value.split(':', 1)[0]
        return f"comments.{action}_comments"


@dataclass(frozen=True)
class AccessContext:
    path: str
    locale: str


def _normalize_path(path: str) -> str:
    return (path or '').strip('/')


class AuthorizationGate:

    def check(self, subject, capabilities: Iterable[Capability], context: AccessContext) -> bool:
        raise NotImplementedError


class PermissionGate(AuthorizationGate):
    """Django permissions + capability settings + path/locale deny rules"""

    def _rule_matches(self, rule: dict, context: AccessContext) -> bool:
        locales = rule.get('locales') or []
        if locales and context.locale not in locales:
            return False
        rule_path = _normalize_path(rule.get('path', ''))
        path = _normalize_path(context.path)
        if rule.get('match', 'START').upper() == 'EXACT':
            return path == rule_path
        return path.startswith(rule_path)

    def _denied_by_rules(self, capabilities: set, context: AccessContext) -> bool:
        for rule in getattr(settings, 'COMMENTS_ACCESS_RULES', []) or []:
            denied = {Capability(c) for c in rule.get('deny', [])}
            if denied & capabilities and self._rule_matches(rule, context):
                return True
        return False

    def check(self, subject, capabilities: Iterable[Capability], context: AccessContext) -> bool:
        capabilities = {Capability(c) for c in capabilities}

        if subject is not None and getattr(subject, 'is_superuser', False):
            return True

        if self._denied_by_rules(capabilities, context):
            logger.info("Access rule denied %s on %s/%s", sorted(c.value for c in capabilities), context.locale, context.path)
            return False

        if subject is None or not subject.is_authenticated:
            granted = {Capability(c) for c in getattr(settings, 'COMMENTS_GUEST_CAPABILITIES', [])}
            return capabilities <= granted

        granted = {Capability(c) for c in getattr(settings, 'COMMENTS_USER_CAPABILITIES', [])}
        return all(c in granted or subject.has_perm(c.permission) for c in capabilities)


_gate: Optional[AuthorizationGate] = None


def get_authorization_gate() -> AuthorizationGate:
    global _gate
    if _gate is None:
        gate_cls = import_string(getattr(settings, 'COMMENTS_AUTHORIZATION_GATE', 'comments.authorization.PermissionGate'))
        _gate = gate_cls()
    return _gate


@receiver(setting_changed)
def _reset_gate(*, setting, **kwargs):
    global _gate
    if setting == 'COMMENTS_AUTHORIZATION_GATE':
        _gate = None
