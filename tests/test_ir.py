import dataclasses

import pytest

from nodetree.errors import UnexpectedNodeParameters
from nodetree.ir import ContainerNode, NodeRecord, SceneReferenceNode


def test_node_record_requires_exactly_one_of_type_or_instance():
    with pytest.raises(UnexpectedNodeParameters, match="exactly one of type or instance"):
        NodeRecord(name="Broken")
    with pytest.raises(UnexpectedNodeParameters):
        NodeRecord(name="Broken", type="Node", instance="1")


def test_node_record_error_carries_record_fields():
    with pytest.raises(UnexpectedNodeParameters) as excinfo:
        NodeRecord(name="Broken", parent=".")

    assert excinfo.value.record.name == "Broken"
    assert excinfo.value.record.parent == "."


def test_children_key_for_root():
    record = NodeRecord(name="Main", type="Node2D")

    assert record.is_root
    assert record.children_key == "."


def test_children_key_for_direct_child_of_root():
    assert NodeRecord(name="Player", type="Node2D", parent=".").children_key == "Player"


def test_children_key_for_nested_node():
    record = NodeRecord(name="Hand", type="Node2D", parent="Body/Arm")

    assert not record.is_root
    assert record.children_key == "Body/Arm/Hand"


def test_nodes_are_immutable():
    node = ContainerNode(name="Root", type="Node")

    with pytest.raises(dataclasses.FrozenInstanceError):
        node.name = "Other"
    with pytest.raises(dataclasses.FrozenInstanceError):
        SceneReferenceNode(name="Enemy", scene_name="Enemy").scene_name = "Boss"
