# tests/test_permissions.py

"""
Tests for the capability query helpers built on the evaluator.
"""

import pytest

from models.enums import Action, Role, Segment
from models.principal import Principal
from core.policy import build_ability
from core.permission_helpers import (
    can_create,
    can_read,
    can_update,
    can_delete,
    can_approve,
    can_manage,
    subject_permissions,
    can_access_module,
    capability_matrix,
    user_abilities,
    requires_ability,
)


def test_editor_predicates(internal_editor):
    """Test the can_* predicates for an internal editor."""
    ability = build_ability(internal_editor)

    assert can_create(ability, "Service")
    assert can_read(ability, "Service")
    assert can_update(ability, "Service")
    assert not can_delete(ability, "Service")
    assert not can_approve(ability, "Service")
    assert not can_manage(ability, "Service")


def test_user_abilities_bundle(internal_editor):
    """Test the predicate bundle handed to UI code."""
    abilities = user_abilities(build_ability(internal_editor))

    assert abilities["canCreate"]("Content")
    assert not abilities["canDelete"]("Content")
    assert not abilities["canManage"]("Content")


def test_subject_permissions_editor(internal_editor):
    """Test an editor's permitted actions on Content."""
    ability = build_ability(internal_editor)

    assert subject_permissions(ability, "Content") == {
        Action.create, Action.read, Action.update, Action.publish, Action.flag,
    }
    assert subject_permissions(ability, "Service") == {
        Action.create, Action.read, Action.update, Action.flag,
    }
    assert subject_permissions(ability, "User") == frozenset()


def test_subject_permissions_partner_admin(partner_admin):
    """Test a partner admin's permitted actions on Content."""
    assert subject_permissions(build_ability(partner_admin), "Content") == {
        Action.manage, Action.create, Action.read, Action.update, Action.approve, Action.archive,
    }


def test_module_access_editor(internal_editor):
    """Test that editors reach content modules only."""
    ability = build_ability(internal_editor)

    for module in ("services", "contents", "business_directory", "zones", "growth_areas"):
        assert can_access_module(ability, module)
    assert not can_access_module(ability, "users")
    assert not can_access_module(ability, "unknown_module")


def test_module_access_viewer(internal_viewer):
    """Test module access for a viewer, including unknown modules."""
    ability = build_ability(internal_viewer)

    assert can_access_module(ability, "users")
    assert can_access_module(ability, "dashboard")
    assert not can_access_module(ability, "billing")


def test_capability_matrix_for_denied_segment():
    """Test that a denied segment gets an empty matrix."""
    ability = build_ability(Principal(role=Role.admin, segment=Segment.customer))

    matrix = capability_matrix(ability)
    assert all(actions == [] for actions in matrix.values())
    assert "all" in matrix


def test_capability_matrix_sorted(internal_admin):
    """Matrix action lists are sorted."""
    matrix = capability_matrix(build_ability(internal_admin))
    assert matrix["Content"] == sorted(matrix["Content"])
    assert len(matrix["Content"]) == 9


def test_requires_ability_rejects_unknown_vocabulary():
    """Test that unknown vocabulary fails at declaration."""
    with pytest.raises(ValueError):
        requires_ability("unpublish", "Content")
    with pytest.raises(ValueError):
        requires_ability("read", "Invoice")
