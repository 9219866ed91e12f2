# core/ability.py

"""
Ability evaluator.

decide() is a pure function of (ability, action, subject, instance):

  1. scan rules newest-first
  2. a rule matches when it names the action (or `manage`) and the
     subject (or `all`)
  3. conditions are only enforced when an instance is supplied;
     a type-level query ignores them
  4. the first matching rule decides
  5. nothing matched → deny

Denied decisions are reported to a hook supplied by the caller (default:
log_decision), so each host audits its own way and the engine holds no
state between calls.
"""

from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from models.enums import Action, Subject, Effect, DecisionReason
from models.ability import Ability, Decision, Rule
from models.principal import Principal
from core.permissions import parse_action, parse_subject
from core.config import settings
from core.logging_config import logger


DecisionHook = Callable[[Optional[Principal], Any, Any, Decision], None]

_MISSING = object()


# -----------------------------------------------------
# Observability hook
# -----------------------------------------------------
def log_decision(principal: Optional[Principal], action, subject, decision: Decision) -> None:
    """Default hook: one log line per denial."""
    level = logger.info if settings.AUTHZ_LOG_DECISIONS else logger.debug
    role = principal.role if principal else None
    segment = principal.segment if principal else None
    level(
        f"Authorization denied: {action} {subject} "
        f"(role={role}, segment={segment}, reason={decision.reason})"
    )


def _notify(hook: Optional[DecisionHook], ability: Ability, action, subject, decision: Decision) -> None:
    if hook is None:
        return
    try:
        hook(ability.principal, action, subject, decision)
    except Exception as e:
        logger.error(f"Authorization decision hook failed: {e}", exc_info=True)


# -----------------------------------------------------
# Matching
# -----------------------------------------------------
def _instance_value(instance, key: str):
    if isinstance(instance, Mapping):
        return instance.get(key, _MISSING)
    return getattr(instance, key, _MISSING)


def condition_matches(condition: Iterable[Tuple[str, Any]], instance) -> bool:
    """Every key must be present on the instance and strictly equal."""
    for key, required in condition:
        if required is None:
            return False
        value = _instance_value(instance, key)
        if value is _MISSING or type(value) is not type(required) or value != required:
            return False
    return True


def rule_matches(rule: Rule, action: Action, subject: Subject, instance=None) -> bool:
    if action not in rule.actions and Action.manage not in rule.actions:
        return False
    if subject not in rule.subjects and Subject.all not in rule.subjects:
        return False
    if rule.condition and instance is not None:
        return condition_matches(rule.condition, instance)
    return True


# ============================================================
# DECIDE
# ============================================================
def decide(ability: Ability, action, subject, instance=None, hook: Optional[DecisionHook] = log_decision) -> Decision:
    """
    Evaluate one query against an ability.

    Usage:
        decide(ability, "update", "Content")                         # type-level
        decide(ability, "update", "Content", {"organization_id": x}) # instance-level
        decide(ability, "read", "Zone", hook=None)                   # no denial reporting
    """
    parsed_action = parse_action(action)
    parsed_subject = parse_subject(subject)

    if parsed_action is None or parsed_subject is None:
        decision = Decision(
            allowed=False,
            reason=DecisionReason.unknown_vocabulary,
            action=str(action),
            subject=str(subject),
        )
        logger.warning(f"Unknown authorization vocabulary: {action!r} {subject!r}")
        _notify(hook, ability, action, subject, decision)
        return decision

    principal = ability.principal
    if principal is not None and principal.gated:
        decision = Decision(
            allowed=False,
            reason=DecisionReason.gated,
            action=parsed_action.value,
            subject=parsed_subject.value,
        )
        _notify(hook, ability, parsed_action, parsed_subject, decision)
        return decision

    rules = ability.rules
    for index in range(len(rules) - 1, -1, -1):
        rule = rules[index]
        if not rule_matches(rule, parsed_action, parsed_subject, instance):
            continue

        allowed = rule.effect is Effect.allow
        decision = Decision(
            allowed=allowed,
            reason=DecisionReason.allowed if allowed else DecisionReason.denied_by_rule,
            action=parsed_action.value,
            subject=parsed_subject.value,
            rule_index=index,
        )
        if not allowed:
            _notify(hook, ability, parsed_action, parsed_subject, decision)
        return decision

    decision = Decision(
        allowed=False,
        reason=DecisionReason.no_matching_rule,
        action=parsed_action.value,
        subject=parsed_subject.value,
    )
    _notify(hook, ability, parsed_action, parsed_subject, decision)
    return decision


def can(ability: Ability, action, subject, instance=None, hook: Optional[DecisionHook] = log_decision) -> bool:
    return decide(ability, action, subject, instance, hook).allowed


def cannot(ability: Ability, action, subject, instance=None, hook: Optional[DecisionHook] = log_decision) -> bool:
    return not can(ability, action, subject, instance, hook)
