from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ACTION
# -----------------------------------------------------
class Action(BaseStrEnum):
    """
    Canonical verbs. Every domain operation maps to one of these.
    `manage` is a super-action: rules on it cover every other action.
    """

    manage = "manage"
    create = "create"
    read = "read"
    update = "update"
    delete = "delete"
    approve = "approve"
    publish = "publish"  # publish / unpublish
    archive = "archive"  # archive / restore
    flag = "flag"


# -----------------------------------------------------
# SUBJECT
# -----------------------------------------------------
class Subject(BaseStrEnum):
    """Domain entities that can be acted upon. `all` matches every subject."""

    User = "User"
    Organization = "Organization"
    Content = "Content"
    Service = "Service"
    Business = "Business"
    Zone = "Zone"
    GrowthArea = "GrowthArea"
    Application = "Application"
    Dashboard = "Dashboard"
    all = "all"


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Canonical roles after alias normalization."""

    admin = "admin"
    editor = "editor"
    approver = "approver"
    viewer = "viewer"
    unauthorized = "unauthorized"  # sentinel for unmapped role claims


# -----------------------------------------------------
# SEGMENT
# -----------------------------------------------------
class Segment(BaseStrEnum):
    """Tenant category. Only internal and partner may use this application."""

    internal = "internal"
    partner = "partner"
    customer = "customer"
    advisor = "advisor"


# -----------------------------------------------------
# RULE EFFECT
# -----------------------------------------------------
class Effect(BaseStrEnum):
    allow = "allow"
    deny = "deny"


# -----------------------------------------------------
# DECISION REASON
# -----------------------------------------------------
class DecisionReason(BaseStrEnum):
    """Why the evaluator reached its verdict."""

    allowed = "allowed"
    denied_by_rule = "denied_by_rule"
    no_matching_rule = "no_matching_rule"
    unknown_vocabulary = "unknown_vocabulary"
    gated = "gated"


# -----------------------------------------------------
# GATE REASON
# -----------------------------------------------------
class GateReason(BaseStrEnum):
    """Why a principal was gated during claim normalization."""

    missing_segment = "missing_segment"
    invalid_segment = "invalid_segment"
