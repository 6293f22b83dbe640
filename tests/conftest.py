"""Shared payloads for roadmap tests."""

import copy

import pytest

from roadmap.lib.types import ExecutionItem, HealthStatus, OKRHierarchy

MINIMAL_ITEM = {
    "id": "exec-001",
    "name": "X",
    "owner": "A",
    "projectManager": "B",
    "health": "on-track",
    "team": "T1",
}

FULL_HIERARCHY = {
    "id": "obj-001",
    "name": "Improve Platform Security",
    "owner": "Security Team Lead",
    "projectManager": "PM Alpha",
    "health": "on-track",
    "team": "Security Squad",
    "type": "Objective",
    "keyResults": [{
        "id": "kr-001",
        "name": "Implement Multi-Factor Authentication",
        "owner": "Auth Engineer",
        "projectManager": "PM Alpha",
        "health": "on-track",
        "team": "Security Squad",
        "type": "Key Result",
        "initiatives": [{
            "id": "init-001",
            "name": "SMS-based 2FA",
            "owner": "Backend Dev",
            "projectManager": "PM Alpha",
            "health": "on-track",
            "team": "Security Squad",
            "type": "Initiative",
            "features": [{
                "id": "feat-001",
                "name": "SMS Gateway Integration",
                "owner": "Integration Specialist",
                "projectManager": "PM Alpha",
                "health": "at-risk",
                "team": "Security Squad",
                "type": "Feature",
                "subFeatures": [{
                    "id": "subfeat-001",
                    "name": "Twilio API Setup",
                    "owner": "DevOps Engineer",
                    "projectManager": "PM Alpha",
                    "health": "on-track",
                    "team": "Security Squad",
                    "type": "Sub Feature",
                }],
            }],
        }],
    }],
}


def make_item(item_id: str, item_type: str = None, health=HealthStatus.ON_TRACK) -> ExecutionItem:
    return ExecutionItem(
        id=item_id,
        name=f"Item {item_id}",
        owner="Owner",
        project_manager="PM",
        health=health,
        team="Squad 1",
        type=item_type,
    )


def make_node(item_id: str, item_type: str = None, **children) -> OKRHierarchy:
    return OKRHierarchy(item=make_item(item_id, item_type), **children)


@pytest.fixture
def minimal_item_dict():
    return copy.deepcopy(MINIMAL_ITEM)


@pytest.fixture
def full_hierarchy_dict():
    return copy.deepcopy(FULL_HIERARCHY)
