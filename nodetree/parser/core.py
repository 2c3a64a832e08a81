import logging
from typing import Dict, List, Optional

from nodetree.errors import (
    AmbiguousRootNode,
    MissingRootNode,
    UnexpectedNodeParameters,
    UnexpectedSceneFormat,
    UnexpectedSceneResource,
    scene_source_context,
)
from nodetree.ir import ContainerNode, Node, NodeRecord, ResourceIndex, SceneReferenceNode

from .constants import DEFAULT_SCENE_FORMAT, SceneFormat
from .helpers import _capitalize_first
from .records import collect_node_records
from .resources import build_resource_index

logger = logging.getLogger(__name__)


class SceneParser:
    def __init__(self, scene_format: Optional[SceneFormat] = None):
        """Create a parser for scene text written in ``scene_format``."""
        self.scene_format = scene_format or DEFAULT_SCENE_FORMAT
        self._scene_path_pattern = self.scene_format.scene_path_pattern()

    def parse(self, source: str, source_path: Optional[str] = None) -> Node:
        """Parse scene text into its root node.

        ``source_path`` only decorates error messages; nothing is read from disk.
        """
        with scene_source_context(source, source_path):
            scenes_by_resource_id = build_resource_index(source, self.scene_format)
            records = collect_node_records(source)
            return self._create_root_node(records, scenes_by_resource_id)

    def _create_root_node(
        self,
        records: List[NodeRecord],
        scenes_by_resource_id: ResourceIndex,
    ) -> Node:
        logger.debug("Creating root node from %d node record(s)", len(records))
        children_by_parent: Dict[Optional[str], List[NodeRecord]] = {}
        for record in records:
            children_by_parent.setdefault(record.parent, []).append(record)

        roots = children_by_parent.get(None, [])
        if not roots:
            raise MissingRootNode()
        if len(roots) > 1:
            raise AmbiguousRootNode([root.name for root in roots])

        return self._to_node(roots[0], children_by_parent, scenes_by_resource_id)

    def _to_node(
        self,
        record: NodeRecord,
        children_by_parent: Dict[Optional[str], List[NodeRecord]],
        scenes_by_resource_id: ResourceIndex,
    ) -> Node:
        if record.type is not None and record.instance is None:
            children = tuple(
                self._to_node(child, children_by_parent, scenes_by_resource_id)
                for child in children_by_parent.get(record.children_key, [])
            )
            return ContainerNode(name=record.name, type=record.type, children=children)

        if record.type is None and record.instance is not None:
            scene_name = self._resolve_scene_name(record.instance, scenes_by_resource_id)
            return SceneReferenceNode(name=record.name, scene_name=scene_name)

        raise UnexpectedNodeParameters(record)

    def _resolve_scene_name(self, instance: str, scenes_by_resource_id: ResourceIndex) -> str:
        scene_path = scenes_by_resource_id.get(instance)
        if scene_path is None:
            raise UnexpectedSceneResource(
                instance,
                fragment=f'"{instance}")',
            )

        match = self._scene_path_pattern.match(scene_path)
        if match is None:
            raise UnexpectedSceneFormat(scene_path)
        return _capitalize_first(match.group(1))
