"""External scene resource table.

Scene files declare the scenes they instance in ``[ext_resource ...]`` lines.
This module reads those lines into a read-only ``id -> path`` index that node
declarations are resolved against.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Optional

from nodetree.errors import DuplicatedSceneResources, UnexpectedResourceFormat
from nodetree.ir import ResourceIndex, ResourceRecord

from .constants import (
    DEFAULT_SCENE_FORMAT,
    SceneFormat,
    _RESOURCE_LINE_PATTERN,
    _RESOURCE_PARAM_PATTERN,
)
from .helpers import _extract_params_segment, _parse_params, _select_lines, _strip_quotes

logger = logging.getLogger(__name__)


def select_resource_lines(
    source: str, scene_format: SceneFormat = DEFAULT_SCENE_FORMAT
) -> List[str]:
    lines = _select_lines(source, scene_format.resource_line_prefix)
    logger.debug("Found %d scene resource line(s)", len(lines))
    return lines


def parse_resource_params(line: str) -> Dict[str, str]:
    logger.debug("Parsing scene resource: %s", line)
    segment = _extract_params_segment(line, _RESOURCE_LINE_PATTERN, UnexpectedResourceFormat)
    return _parse_params(segment, _RESOURCE_PARAM_PATTERN)


def create_resource_record(params: Dict[str, str]) -> Optional[ResourceRecord]:
    resource_id = _strip_quotes(params.get("id"))
    path = _strip_quotes(params.get("path"))
    if resource_id is None or path is None:
        logger.debug("Skipping scene resource without id/path: %r", params)
        return None
    return ResourceRecord(id=resource_id, path=path)


def index_resources(records: List[ResourceRecord]) -> ResourceIndex:
    """Build the ``id -> path`` index, rejecting ids declared more than once."""
    paths_by_id: Dict[str, List[str]] = {}
    for record in records:
        paths_by_id.setdefault(record.id, []).append(record.path)

    duplicates = {
        resource_id: paths for resource_id, paths in paths_by_id.items() if len(paths) > 1
    }
    if duplicates:
        raise DuplicatedSceneResources(duplicates)

    return MappingProxyType({record.id: record.path for record in records})


def build_resource_index(
    source: str, scene_format: SceneFormat = DEFAULT_SCENE_FORMAT
) -> ResourceIndex:
    records = []
    for line in select_resource_lines(source, scene_format):
        record = create_resource_record(parse_resource_params(line))
        if record is not None:
            records.append(record)
    return index_resources(records)
