import textwrap

import pytest

from nodetree.errors import (
    DuplicatedSceneResources,
    UnexpectedResourceFormat,
    scene_source_context,
)
from nodetree.ir import ResourceRecord
from nodetree.parser.constants import SceneFormat
from nodetree.parser.resources import (
    build_resource_index,
    create_resource_record,
    index_resources,
    parse_resource_params,
    select_resource_lines,
)


def test_build_resource_index_maps_ids_to_paths():
    index = build_resource_index(
        textwrap.dedent(
            """
            [gd_scene load_steps=3 format=3]
            [ext_resource type="PackedScene" path="res://enemy.tscn" id="1"]
            [ext_resource type="PackedScene" uid="uid://x" path="res://coin.tscn" id="2_ab"]
            [ext_resource type="Texture2D" path="res://icon.svg" id="3"]
            """
        )
    )

    assert dict(index) == {"1": "res://enemy.tscn", "2_ab": "res://coin.tscn"}


def test_resource_index_is_read_only():
    index = build_resource_index('[ext_resource type="PackedScene" path="res://a.tscn" id="1"]')

    with pytest.raises(TypeError):
        index["2"] = "res://b.tscn"


def test_only_packed_scene_lines_are_selected():
    source = "\n".join(
        [
            '[ext_resource type="Script" path="res://a.gd" id="1"]',
            '[ext_resource type="PackedScene" path="res://a.tscn" id="2"]',
            '[ext_resource type="PackedScene" path="res://b.tscn" id="3"',
        ]
    )

    assert select_resource_lines(source) == [
        '[ext_resource type="PackedScene" path="res://a.tscn" id="2"]'
    ]


def test_select_lines_for_custom_resource_type():
    source = '[ext_resource type="PackedScene3D" path="res://a.tscn" id="2"]'

    assert select_resource_lines(source, SceneFormat(resource_type="PackedScene3D")) == [source]


def test_parse_resource_params_keeps_quotes():
    params = parse_resource_params('[ext_resource type="PackedScene" path="res://a.tscn" id="1"]')

    assert params == {"type": '"PackedScene"', "path": '"res://a.tscn"', "id": '"1"'}


def test_reject_resource_line_without_parameter_segment():
    with pytest.raises(UnexpectedResourceFormat) as excinfo:
        parse_resource_params('[ext_resource_type="PackedScene"]')

    assert excinfo.value.line == '[ext_resource_type="PackedScene"]'


def test_resource_without_id_or_path_is_skipped():
    assert create_resource_record({"path": '"res://a.tscn"'}) is None
    assert create_resource_record({"id": '"1"'}) is None
    assert create_resource_record({"id": '"1"', "path": '"res://a.tscn"'}) == ResourceRecord(
        id="1", path="res://a.tscn"
    )


def test_resource_without_id_does_not_reach_index():
    index = build_resource_index(
        '[ext_resource type="PackedScene" path="res://a.tscn"]\n'
        '[ext_resource type="PackedScene" path="res://b.tscn" id="1"]'
    )

    assert dict(index) == {"1": "res://b.tscn"}


def test_reject_duplicated_resource_ids():
    source = (
        '[ext_resource type="PackedScene" path="res://a.tscn" id="1"]\n'
        '[ext_resource type="PackedScene" path="res://b.tscn" id="1"]'
    )
    with pytest.raises(DuplicatedSceneResources) as excinfo:
        with scene_source_context(source):
            build_resource_index(source)

    assert excinfo.value.duplicates == {"1": ["res://a.tscn", "res://b.tscn"]}
    assert "Location: line 1" in str(excinfo.value)


def test_duplicated_ids_are_reported_in_any_declaration_order():
    with pytest.raises(DuplicatedSceneResources) as excinfo:
        index_resources(
            [
                ResourceRecord(id="1", path="res://b.tscn"),
                ResourceRecord(id="2", path="res://c.tscn"),
                ResourceRecord(id="1", path="res://a.tscn"),
            ]
        )

    assert sorted(excinfo.value.duplicates["1"]) == ["res://a.tscn", "res://b.tscn"]
    assert "2" not in excinfo.value.duplicates
