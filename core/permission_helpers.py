from fastapi import Depends
from typing import Dict, FrozenSet, Iterable, List, Tuple

from models.enums import Action, Subject
from models.ability import Ability, Decision
from models.principal import Principal
from core.ability import can, decide
from core.permissions import ACTIONS, SUBJECTS, parse_action, parse_subject
from core.policy import build_ability
from core.errors import forbidden, forbidden_any, unauthorized
from core.logging_config import logger
from dependencies.auth import get_current_principal


# -----------------------------------------------------
# Module name → subject (sidebar / route gating)
# -----------------------------------------------------
MODULE_SUBJECTS = {
    "services": Subject.Service,
    "contents": Subject.Content,
    "business_directory": Subject.Business,
    "zones": Subject.Zone,
    "growth_areas": Subject.GrowthArea,
    "users": Subject.User,
    "organizations": Subject.Organization,
    "dashboard": Subject.Dashboard,
}


# ============================================================
# CAPABILITY PREDICATES
# ============================================================

def can_create(ability: Ability, subject) -> bool:
    return can(ability, Action.create, subject)


def can_read(ability: Ability, subject) -> bool:
    return can(ability, Action.read, subject)


def can_update(ability: Ability, subject) -> bool:
    return can(ability, Action.update, subject)


def can_delete(ability: Ability, subject) -> bool:
    return can(ability, Action.delete, subject)


def can_approve(ability: Ability, subject) -> bool:
    return can(ability, Action.approve, subject)


def can_manage(ability: Ability, subject) -> bool:
    return can(ability, Action.manage, subject)


def user_abilities(ability: Ability) -> dict:
    """Predicate bundle handed to UI code."""
    return {
        "canCreate": lambda subject: can_create(ability, subject),
        "canRead": lambda subject: can_read(ability, subject),
        "canUpdate": lambda subject: can_update(ability, subject),
        "canDelete": lambda subject: can_delete(ability, subject),
        "canApprove": lambda subject: can_approve(ability, subject),
        "canManage": lambda subject: can_manage(ability, subject),
    }


def subject_permissions(ability: Ability, subject) -> FrozenSet[Action]:
    """Every canonical action that passes a type-level check on `subject`."""
    # capability lookups are queries, not denials worth reporting
    return frozenset(a for a in ACTIONS if can(ability, a, subject, hook=None))


def can_access_module(ability: Ability, module_name: str) -> bool:
    """Unknown modules are denied."""
    subject = MODULE_SUBJECTS.get(module_name)
    if subject is None:
        return False
    return can_read(ability, subject)


def capability_matrix(ability: Ability) -> Dict[str, List[str]]:
    """Subject → permitted actions, for optimistic UI gating."""
    return {
        s.value: sorted(a.value for a in subject_permissions(ability, s))
        for s in SUBJECTS
    }


# ============================================================
# ENFORCEMENT (FastAPI dependencies)
# ============================================================

def _require_vocabulary(action, subject) -> Tuple[Action, Subject]:
    # Unknown vocabulary in a route declaration is a programmer error
    parsed_action, parsed_subject = parse_action(action), parse_subject(subject)
    if parsed_action is None or parsed_subject is None:
        raise ValueError(f"Unknown authorization vocabulary: {action!r} {subject!r}")
    return parsed_action, parsed_subject


def enforce(ability: Ability, action, subject, instance=None) -> Decision:
    """
    Instance-level check inside a route body.
    Raises 401 when there is no ability and 403 when the decision denies.
    """
    if ability is None:
        raise unauthorized()

    decision = decide(ability, action, subject, instance)
    if not decision.allowed:
        raise forbidden(action, subject)
    return decision


def get_current_ability(principal: Principal = Depends(get_current_principal)) -> Ability:
    return build_ability(principal)


def requires_ability(action, subject):
    """
    Usage:
        @router.post("", dependencies=[Depends(requires_ability("create", "Content"))])
    """
    action, subject = _require_vocabulary(action, subject)

    def dependency(ability: Ability = Depends(get_current_ability)) -> Ability:
        if not can(ability, action, subject):
            raise forbidden(action, subject)
        return ability

    return dependency


def _require_pairs(pairs) -> List[Tuple[Action, Subject]]:
    checks = [_require_vocabulary(a, s) for a, s in pairs]
    if not checks:
        raise ValueError("At least one (action, subject) pair is required")
    return checks


def requires_any_ability(pairs: Iterable[Tuple[str, str]]):
    """Passes when any one pair is allowed. The 403 lists every pair checked."""
    checks = _require_pairs(pairs)

    def dependency(ability: Ability = Depends(get_current_ability)) -> Ability:
        if not any(can(ability, a, s) for a, s in checks):
            raise forbidden_any(checks)
        return ability

    return dependency


def requires_all_abilities(pairs: Iterable[Tuple[str, str]]):
    checks = _require_pairs(pairs)

    def dependency(ability: Ability = Depends(get_current_ability)) -> Ability:
        for action, subject in checks:
            if not can(ability, action, subject):
                logger.debug(f"requires_all_abilities failed on {action} {subject}")
                raise forbidden(action, subject)
        return ability

    return dependency
