# core/policy.py

"""
Policy compiler.

One table, consumed by every host, turns a Principal into an ordered rule
list. Declaration order matters: the evaluator scans rules newest-first,
so a narrow deny placed after a broad grant overrides it.

Layering for a usable principal:
    1. base grants + segment overrides   POLICY_TABLE[role][segment]
    2. role-wide restrictions            ROLE_RESTRICTIONS[role]
    3. segment tail (flag capability)    _segment_tail()
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from models.enums import Action, Subject, Role, Segment, Effect
from models.principal import Principal
from models.ability import Ability, Rule
from core.permissions import ACTIONS, SUBJECTS, CONTENT_SUBJECTS, ACTION_DESCRIPTIONS
from core.logging_config import logger


# -----------------------------------------------------
# Scopes decide whether a template carries an org condition
# -----------------------------------------------------
UNSCOPED = "unscoped"  # never conditioned
TENANT = "tenant"      # conditioned for partner principals only
OWNER = "owner"        # conditioned for every segment

APP_SEGMENTS = (Segment.internal, Segment.partner)


@dataclass(frozen=True)
class RuleTemplate:
    effect: Effect
    actions: Tuple[Action, ...]
    subjects: Tuple[Subject, ...]
    scope: str = UNSCOPED

    def compile(self, principal: Principal) -> Rule:
        condition = None
        if self.scope == OWNER or (self.scope == TENANT and principal.segment is Segment.partner):
            condition = (("organization_id", principal.organization_id),)

        return Rule(
            effect=self.effect,
            actions=frozenset(self.actions),
            subjects=frozenset(self.subjects),
            condition=condition,
        )


def allow(actions, subjects, scope: str = UNSCOPED) -> RuleTemplate:
    return RuleTemplate(Effect.allow, _tuple(actions), _tuple(subjects), scope)


def deny(actions, subjects) -> RuleTemplate:
    return RuleTemplate(Effect.deny, _tuple(actions), _tuple(subjects))


def _tuple(value) -> tuple:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


ALL = Subject.all
CONTENT_AND_SERVICE = (Subject.Content, Subject.Service)
MUTATIONS = (
    Action.create,
    Action.update,
    Action.delete,
    Action.approve,
    Action.publish,
    Action.archive,
    Action.flag,
)
PARTNER_ADMIN_SCOPED = (Action.create, Action.update, Action.approve, Action.archive)


# =====================================================
# ROLE × SEGMENT → BASE GRANTS AND OVERRIDES
# =====================================================
POLICY_TABLE: Dict[Role, Dict[Segment, Tuple[RuleTemplate, ...]]] = {

    # =====================================================
    # ADMIN
    # =====================================================
    Role.admin: {
        Segment.internal: (
            allow(Action.manage, ALL),
        ),
        # Partner admins run their own organization but never
        # delete or publish. Their mutations are org-scoped.
        Segment.partner: (
            allow(Action.manage, ALL),
            deny(PARTNER_ADMIN_SCOPED + (Action.delete,), CONTENT_SUBJECTS),
            allow(PARTNER_ADMIN_SCOPED, CONTENT_SUBJECTS, TENANT),
            deny(Action.publish, CONTENT_AND_SERVICE),
        ),
    },

    # =====================================================
    # EDITOR — creates and updates within own organization
    # =====================================================
    Role.editor: {
        Segment.internal: (
            allow(Action.read, CONTENT_SUBJECTS),
            allow((Action.create, Action.update), CONTENT_SUBJECTS, OWNER),
            allow(Action.publish, Subject.Content, TENANT),
        ),
        Segment.partner: (
            allow(Action.read, CONTENT_SUBJECTS),
            allow((Action.create, Action.update), CONTENT_SUBJECTS, OWNER),
            allow(Action.publish, Subject.Content, TENANT),
        ),
    },

    # =====================================================
    # APPROVER — reviews; only internal approvers publish
    # =====================================================
    Role.approver: {
        Segment.internal: (
            allow(Action.read, ALL),
            allow(Action.approve, CONTENT_AND_SERVICE, TENANT),
            allow(Action.publish, CONTENT_AND_SERVICE),
        ),
        Segment.partner: (
            allow(Action.read, ALL),
            allow(Action.approve, CONTENT_AND_SERVICE, TENANT),
            deny(Action.publish, CONTENT_AND_SERVICE),
        ),
    },

    # =====================================================
    # VIEWER — read-only
    # =====================================================
    Role.viewer: {
        Segment.internal: (
            allow(Action.read, ALL),
        ),
        Segment.partner: (
            allow(Action.read, ALL),
        ),
    },
}


# =====================================================
# ROLE-WIDE RESTRICTIONS (layered after base grants)
# =====================================================
ROLE_RESTRICTIONS: Dict[Role, Tuple[RuleTemplate, ...]] = {
    Role.admin: (),
    Role.editor: (
        deny((Action.delete, Action.approve), ALL),
    ),
    Role.approver: (
        deny((Action.create, Action.update, Action.delete), ALL),
    ),
    Role.viewer: (
        deny(MUTATIONS, ALL),
    ),
}


ROLE_DESCRIPTIONS = {
    Role.admin: "Full administrative control. Partner admins are org-scoped and cannot delete or publish.",
    Role.editor: "Can create, update, and publish content for their organization. Cannot delete or approve.",
    Role.approver: "Can review and approve content. Internal approvers can publish. Read access to all entities.",
    Role.viewer: "Read-only access to all entities. Cannot modify or approve.",
}


def _segment_tail(principal: Principal) -> Tuple[RuleTemplate, ...]:
    # Only internal staff may flag for review
    if principal.segment is Segment.internal:
        if principal.role is Role.viewer:
            return ()
        return (allow(Action.flag, CONTENT_AND_SERVICE),)
    return (deny(Action.flag, ALL),)


def deny_all_ability(principal: Optional[Principal] = None) -> Ability:
    """The universal-deny ability: exactly one rule, deny manage all."""
    return Ability(
        rules=(Rule(effect=Effect.deny, actions=frozenset({Action.manage}), subjects=frozenset({ALL})),),
        principal=principal,
    )


def templates_for(principal: Principal) -> Optional[Tuple[RuleTemplate, ...]]:
    """Ordered templates for a usable principal, or None when it must be denied everything."""
    if principal.gated or principal.segment not in APP_SEGMENTS:
        return None

    by_segment = POLICY_TABLE.get(principal.role)
    if by_segment is None:
        return None

    return (
        by_segment[principal.segment]
        + ROLE_RESTRICTIONS.get(principal.role, ())
        + _segment_tail(principal)
    )


# ============================================================
# BUILD ABILITY
# ============================================================
def build_ability(principal: Principal) -> Ability:
    """
    Compile the ordered rule list for one principal.
    Never raises; unusable principals get deny_all_ability().
    """
    templates = templates_for(principal)

    if templates is None:
        if principal.gated:
            logger.warning(f"Denying all access: principal gated ({principal.gate_reason})")
        elif principal.role is Role.unauthorized:
            logger.warning(f"Denying all access: unrecognized role (user={principal.user_id})")
        else:
            logger.warning(f"Denying all access: segment '{principal.segment}' not permitted")
        return deny_all_ability(principal)

    rules = tuple(t.compile(principal) for t in templates)
    return Ability(rules=rules, principal=principal)


# ============================================================
# POLICY EXPORT (audit / documentation)
# ============================================================
def _describe_rule(template: RuleTemplate, segment: Segment) -> dict:
    conditioned = template.scope == OWNER or (template.scope == TENANT and segment is Segment.partner)
    return {
        "effect": template.effect.value,
        "actions": [a.value for a in template.actions],
        "subjects": [s.value for s in template.subjects],
        "condition": {"organization_id": "$principal.organization_id"} if conditioned else None,
    }


def describe_policies(version: str = "1.0.0") -> dict:
    """Full Role → Segment → ordered rule matrix, JSON-serializable."""
    roles: List[dict] = []

    for role, by_segment in POLICY_TABLE.items():
        segments = {}
        for segment in APP_SEGMENTS:
            # a representative principal is enough: only role/segment shape the templates
            templates = templates_for(Principal(role=role, segment=segment))
            segments[segment.value] = [_describe_rule(t, segment) for t in templates]

        roles.append({
            "role": role.value,
            "description": ROLE_DESCRIPTIONS[role],
            "segments": segments,
        })

    return {
        "actions": [
            {"action": a.value, "description": ACTION_DESCRIPTIONS[a]} for a in ACTIONS
        ],
        "subjects": [s.value for s in SUBJECTS],
        "roles": roles,
        "denied_segments": [s.value for s in Segment if s not in APP_SEGMENTS],
        "metadata": {
            "version": version,
            "exportedAt": datetime.now(timezone.utc).isoformat(),
            "canonicalActionsCount": len(ACTIONS),
            "subjectsCount": len(SUBJECTS),
            "rolesCount": len(POLICY_TABLE),
        },
    }
