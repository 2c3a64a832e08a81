import json
from pathlib import Path
from typing import Any, Dict, Optional

from nodetree.ir import ContainerNode, Node, SceneReferenceNode
from nodetree.parser import SceneFormat, SceneParser


def parse_scene(
    source: str,
    source_path: Optional[str] = None,
    *,
    scene_format: Optional[SceneFormat] = None,
) -> Node:
    """Parse scene text into its root :class:`Node`."""
    return SceneParser(scene_format).parse(source, source_path=source_path)


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Serialize a node and its subtree as a tagged tree payload."""
    if isinstance(node, ContainerNode):
        return {
            "kind": "container",
            "name": node.name,
            "type": node.type,
            "children": [node_to_dict(child) for child in node.children],
        }
    if isinstance(node, SceneReferenceNode):
        return {
            "kind": "scene_reference",
            "name": node.name,
            "scene_name": node.scene_name,
        }
    raise TypeError(f"Unsupported node: {node!r}")


def export_scene(
    source: str,
    output_path: str,
    source_path: Optional[str] = None,
    *,
    scene_format: Optional[SceneFormat] = None,
) -> Node:
    """Parse scene text and write its tagged tree as JSON to ``output_path``."""
    root = parse_scene(source, source_path=source_path, scene_format=scene_format)
    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(
        json.dumps(node_to_dict(root), indent=2, sort_keys=True),
        encoding="utf-8",
    )
    return root
