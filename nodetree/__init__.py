"""Public Python API for nodetree.

The package turns Godot-style scene text into a typed node tree and exposes
a small stable surface for parsing and JSON export. Node types live in
``nodetree.ir``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from nodetree.errors import (
    AmbiguousRootNode,
    DuplicatedSceneResources,
    InvalidProjectError,
    MissingRootNode,
    SceneError,
    SceneParseError,
    UnexpectedNodeFormat,
    UnexpectedNodeParameters,
    UnexpectedResourceFormat,
    UnexpectedSceneFormat,
    UnexpectedSceneResource,
    UnsupportedQuoting,
)
from nodetree.exporter import export_scene, node_to_dict, parse_scene
from nodetree.ir import ContainerNode, Node, SceneReferenceNode
from nodetree.parser import SceneFormat, SceneParser

try:
    __version__: str = version("nodetree")
except PackageNotFoundError:  # pragma: no cover - editable local fallback
    __version__ = "0.1.0"


__all__ = [
    "__version__",
    "AmbiguousRootNode",
    "ContainerNode",
    "DuplicatedSceneResources",
    "InvalidProjectError",
    "MissingRootNode",
    "Node",
    "SceneError",
    "SceneFormat",
    "SceneParseError",
    "SceneParser",
    "SceneReferenceNode",
    "UnexpectedNodeFormat",
    "UnexpectedNodeParameters",
    "UnexpectedResourceFormat",
    "UnexpectedSceneFormat",
    "UnexpectedSceneResource",
    "UnsupportedQuoting",
    "export_scene",
    "node_to_dict",
    "parse_scene",
]
