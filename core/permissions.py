# core/permissions.py

"""
Canonical permission vocabulary.

Single source of truth for actions and subjects. The claim normalizer,
the policy compiler and the evaluator all import from here.
"""

from typing import Optional

from models.enums import Action, Subject


ACTIONS = tuple(Action)
SUBJECTS = tuple(Subject)

# Subjects with create/read/update workflows scoped by organization
CONTENT_SUBJECTS = (
    Subject.Service,
    Subject.Content,
    Subject.Business,
    Subject.Zone,
    Subject.GrowthArea,
)


# ============================================
# ACTION DESCRIPTIONS (audit metadata)
# ============================================
ACTION_DESCRIPTIONS = {
    Action.manage: "Full administrative control over all actions and entities",
    Action.create: "Create new entities",
    Action.read: "View and read entities",
    Action.update: "Modify existing entities",
    Action.delete: "Permanently remove entities",
    Action.approve: "Validate and approve workflow transitions",
    Action.publish: "Publish or unpublish content (bidirectional lifecycle transition)",
    Action.archive: "Archive or restore entities (bidirectional)",
    Action.flag: "Mark entities for review or follow-up",
}


def parse_action(value) -> Optional[Action]:
    """Return the Action for `value`, or None when it is outside the vocabulary."""
    if isinstance(value, Action):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Action(value)
    except ValueError:
        return None


def parse_subject(value) -> Optional[Subject]:
    """Return the Subject for `value`, or None when it is outside the vocabulary."""
    if isinstance(value, Subject):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Subject(value)
    except ValueError:
        return None


def is_action(value) -> bool:
    return parse_action(value) is not None


def is_subject(value) -> bool:
    return parse_subject(value) is not None
