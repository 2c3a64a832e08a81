import logging
from typing import Dict, List, Optional

from nodetree.errors import UnexpectedNodeFormat
from nodetree.ir import PATH_SEPARATOR, ROOT_PARENT, NodeRecord

from .constants import NODE_LINE_PREFIX, _NODE_LINE_PATTERN, _NODE_PARAM_PATTERN
from .helpers import _extract_params_segment, _parse_params, _select_lines, _strip_quotes, _unwrap

logger = logging.getLogger(__name__)


def select_node_lines(source: str) -> List[str]:
    lines = _select_lines(source, NODE_LINE_PREFIX)
    logger.debug("Found %d node line(s)", len(lines))
    return lines


def parse_node_params(line: str) -> Dict[str, str]:
    logger.debug("Parsing node: %s", line)
    segment = _extract_params_segment(line, _NODE_LINE_PATTERN, UnexpectedNodeFormat)
    return _parse_params(segment, _NODE_PARAM_PATTERN)


def extract_node_params(source: str) -> List[Dict[str, str]]:
    """Return the raw parameters of every node declaration, in source order."""
    return [parse_node_params(line) for line in select_node_lines(source)]


def _is_path_segment(name: str) -> bool:
    return name != ROOT_PARENT and PATH_SEPARATOR not in name


def create_node_record(params: Dict[str, str]) -> Optional[NodeRecord]:
    """Type a raw node declaration, or return ``None`` when it is incomplete.

    A declaration needs a ``name`` usable as one path segment and exactly one
    of ``type`` or ``instance``. Anything else is not a node this tree can
    hold and is skipped.
    """
    name = _strip_quotes(params.get("name"))
    node_type = _strip_quotes(params.get("type"))
    instance = _unwrap(params.get("instance"))
    parent = _strip_quotes(params.get("parent"))

    if name is None or (node_type is None) == (instance is None):
        logger.debug("Skipping node with incomplete parameters: %r", params)
        return None
    if not _is_path_segment(name):
        logger.debug("Skipping node whose name is not a path segment: %r", params)
        return None

    return NodeRecord(name=name, type=node_type, instance=instance, parent=parent)


def collect_node_records(source: str) -> List[NodeRecord]:
    records = []
    for params in extract_node_params(source):
        record = create_node_record(params)
        if record is not None:
            records.append(record)
    return records
