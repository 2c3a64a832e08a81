import re
from dataclasses import dataclass

LINE_TERMINATOR = "]"
NODE_LINE_PREFIX = "[node"

_RESOURCE_LINE_PATTERN = re.compile(r"^\[ext_resource (.*)]$")
_NODE_LINE_PATTERN = re.compile(r"^\[node (.*)]$")

# key="value"
_RESOURCE_PARAM_PATTERN = re.compile(r'\w+="[^"]*"')
# key="value" or key=Wrapper("value")
_NODE_PARAM_PATTERN = re.compile(r'\w+=("[^"]*"|\w+\(".+?"\))')

_ESCAPED_QUOTE = '\\"'

# Wrapper("value") -> value
_INSTANCE_WRAPPER_PATTERN = re.compile(r'^\w+\("(.*)"\)$')


@dataclass(frozen=True)
class SceneFormat:
    """Markers of the scene text format that vary between engine versions."""

    resource_type: str = "PackedScene"
    scene_prefix: str = "res://"
    scene_extension: str = ".tscn"

    @property
    def resource_line_prefix(self) -> str:
        return f'[ext_resource type="{self.resource_type}"'

    def scene_path_pattern(self) -> "re.Pattern[str]":
        return re.compile(
            "^" + re.escape(self.scene_prefix) + "(.+)" + re.escape(self.scene_extension) + "$"
        )


DEFAULT_SCENE_FORMAT = SceneFormat()
