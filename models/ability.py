# models/ability.py

from collections.abc import Mapping
from typing import FrozenSet, Optional, Tuple
from pydantic import BaseModel, ConfigDict, field_validator

from models.enums import Action, Subject, Effect, DecisionReason
from models.principal import Principal


Condition = Tuple[Tuple[str, Optional[str]], ...]


# ===============================================================
# RULE
# ===============================================================

class Rule(BaseModel):
    """
    One allow/deny statement over actions and subjects.

    `condition` holds (instance attribute name, required value) pairs and is
    only enforced on instance-level checks. A mapping is accepted on input
    and stored as sorted pairs so a compiled rule cannot be edited in place.
    """
    model_config = ConfigDict(frozen=True)

    effect: Effect
    actions: FrozenSet[Action]
    subjects: FrozenSet[Subject]
    condition: Optional[Condition] = None

    @field_validator("condition", mode="before")
    @classmethod
    def freeze_condition(cls, v):
        if isinstance(v, Mapping):
            return tuple(sorted(v.items()))
        return v


# ===============================================================
# ABILITY — ordered rule list for one principal
# ===============================================================

class Ability(BaseModel):
    """Rules in declaration order. The last matching rule wins."""
    model_config = ConfigDict(frozen=True)

    rules: Tuple[Rule, ...] = ()
    principal: Optional[Principal] = None

    def __len__(self):
        return len(self.rules)


# ===============================================================
# DECISION — evaluator result
# ===============================================================

class Decision(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: DecisionReason
    action: str
    subject: str
    rule_index: Optional[int] = None  # position of the deciding rule

    def __bool__(self):
        return self.allowed
