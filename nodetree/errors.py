import contextvars
from contextlib import contextmanager
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

if TYPE_CHECKING:
    from nodetree.ir import NodeRecord


_CURRENT_SCENE_SOURCE: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "nodetree_current_scene_source", default=None
)
_CURRENT_SCENE_PATH: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "nodetree_current_scene_path", default=None
)


def _source_lines(source: str) -> List[str]:
    return [line.removesuffix("\r") for line in source.split("\n")]


def _find_line(source: str, fragment: str) -> Optional[int]:
    for line_no, line in enumerate(_source_lines(source), start=1):
        if fragment in line:
            return line_no
    return None


def _format_with_context(message: str, *, fragment: Optional[str] = None) -> str:
    source = _CURRENT_SCENE_SOURCE.get()
    if source is None or not fragment:
        return message

    line_no = _find_line(source, fragment)
    if line_no is None:
        return message

    path = _CURRENT_SCENE_PATH.get()
    location = f"line {line_no}" if path is None else f"{path}, line {line_no}"
    details = [f"Location: {location}"]
    code = _source_lines(source)[line_no - 1].strip()
    if code:
        details.append(f"Code: {code}")
    return f"{message}\n" + "\n".join(details)


@contextmanager
def scene_source_context(source: str, source_path: Optional[str] = None) -> Iterator[None]:
    """Make ``source`` available to error messages raised inside the block."""
    source_token = _CURRENT_SCENE_SOURCE.set(source)
    path_token = _CURRENT_SCENE_PATH.set(source_path)
    try:
        yield
    finally:
        _CURRENT_SCENE_PATH.reset(path_token)
        _CURRENT_SCENE_SOURCE.reset(source_token)


class SceneError(Exception):
    """Base nodetree error."""


class InvalidProjectError(SceneError):
    """Raised when a directory is not a recognized project root."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not a valid project directory (no project.godot found): {path}")


class SceneParseError(SceneError):
    """Raised when scene text cannot be turned into a node tree."""

    def __init__(self, message: str, *, fragment: Optional[str] = None):
        super().__init__(_format_with_context(message, fragment=fragment))


class UnexpectedResourceFormat(SceneParseError):
    def __init__(self, line: str):
        self.line = line
        super().__init__(
            f"A scene resource with unexpected format encountered: {line}",
            fragment=line,
        )


class UnexpectedNodeFormat(SceneParseError):
    def __init__(self, line: str):
        self.line = line
        super().__init__(f"A node with unexpected format encountered: {line}", fragment=line)


class UnsupportedQuoting(SceneParseError):
    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Escaped quotes are not supported: {line}", fragment=line)


class DuplicatedSceneResources(SceneParseError):
    def __init__(self, duplicates: Dict[str, List[str]]):
        self.duplicates = {resource_id: list(paths) for resource_id, paths in duplicates.items()}
        listed = "; ".join(
            f"{resource_id} -> {', '.join(paths)}"
            for resource_id, paths in self.duplicates.items()
        )
        first_id = next(iter(self.duplicates), None)
        super().__init__(
            f"Scene resources with duplicated ids encountered: {listed}",
            fragment=f'id="{first_id}"' if first_id is not None else None,
        )


class UnexpectedSceneResource(SceneParseError):
    def __init__(self, resource_id: str, *, fragment: Optional[str] = None):
        self.resource_id = resource_id
        super().__init__(
            f"A node references an unknown scene resource: {resource_id}",
            fragment=fragment,
        )


class UnexpectedSceneFormat(SceneParseError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"A scene resource with unexpected path encountered: {path}", fragment=path)


class UnexpectedNodeParameters(SceneParseError):
    def __init__(self, record: "NodeRecord"):
        self.record = record
        super().__init__(
            "A node must declare exactly one of type or instance: "
            f"name={record.name!r}, type={record.type!r}, instance={record.instance!r}",
            fragment=f'name="{record.name}"',
        )


class MissingRootNode(SceneParseError):
    def __init__(self):
        super().__init__("The scene declares no root node (a node without parent).")


class AmbiguousRootNode(SceneParseError):
    def __init__(self, names: List[str]):
        self.names = list(names)
        super().__init__(
            f"The scene declares more than one root node: {', '.join(self.names)}",
            fragment=f'name="{self.names[1]}"' if len(self.names) > 1 else None,
        )
