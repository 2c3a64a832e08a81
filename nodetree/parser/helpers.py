import re
from typing import Dict, List, Optional, Type

from nodetree.errors import SceneParseError, UnsupportedQuoting

from .constants import _ESCAPED_QUOTE, _INSTANCE_WRAPPER_PATTERN, LINE_TERMINATOR


def _split_lines(source: str) -> List[str]:
    # Only "\n" ends a line; quoted values may hold other line-break characters.
    return [line.removesuffix("\r") for line in source.split("\n")]


def _select_lines(source: str, prefix: str) -> List[str]:
    return [
        line
        for line in _split_lines(source)
        if line.startswith(prefix) and line.endswith(LINE_TERMINATOR)
    ]


def _extract_params_segment(
    line: str,
    pattern: "re.Pattern[str]",
    error: Type[SceneParseError],
) -> str:
    match = pattern.match(line)
    if match is None or match.lastindex != 1:
        raise error(line)
    segment = match.group(1)
    if _ESCAPED_QUOTE in segment:
        raise UnsupportedQuoting(line)
    return segment


def _parse_params(segment: str, pattern: "re.Pattern[str]") -> Dict[str, str]:
    params: Dict[str, str] = {}
    for match in pattern.finditer(segment):
        key, _, value = match.group(0).partition("=")
        params[key] = value
    return params


def _strip_quotes(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip('"')


def _unwrap(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    match = _INSTANCE_WRAPPER_PATTERN.match(value)
    return match.group(1) if match is not None else value


def _capitalize_first(text: str) -> str:
    # str.capitalize() would lowercase the rest of the name.
    return text[:1].upper() + text[1:]
