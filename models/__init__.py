# -------------------------
# Vocabulary
# -------------------------
from .enums import (
    Action,
    Subject,
    Role,
    Segment,
    Effect,
    DecisionReason,
    GateReason,
)

# -------------------------
# Authorization Models
# -------------------------
from .principal import Principal
from .ability import Rule, Ability, Decision

# -------------------------
# Content Models
# -------------------------
from .content import ContentBase, ContentCreate, ContentRead
