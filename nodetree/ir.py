from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from nodetree.errors import UnexpectedNodeParameters

ROOT_PARENT = "."
PATH_SEPARATOR = "/"

ResourceIndex = Mapping[str, str]


@dataclass(frozen=True)
class ResourceRecord:
    id: str
    path: str


@dataclass(frozen=True)
class NodeRecord:
    name: str
    type: Optional[str] = None
    instance: Optional[str] = None
    parent: Optional[str] = None

    def __post_init__(self):
        has_type = self.type is not None
        has_instance = self.instance is not None
        if has_type == has_instance:
            raise UnexpectedNodeParameters(self)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def children_key(self) -> str:
        """Parent value that this record's children declare."""
        if self.parent is None:
            return ROOT_PARENT
        if self.parent == ROOT_PARENT:
            return self.name
        return f"{self.parent}{PATH_SEPARATOR}{self.name}"


# Tree

class Node:
    name: str


@dataclass(frozen=True)
class ContainerNode(Node):
    name: str
    type: str
    children: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class SceneReferenceNode(Node):
    name: str
    scene_name: str
