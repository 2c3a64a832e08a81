"""Public parser entry points.

Pipeline stages live in ``resources`` and ``records``; use
:class:`nodetree.parser.core.SceneParser` as the stable API.
"""

from nodetree.parser.constants import DEFAULT_SCENE_FORMAT, SceneFormat
from nodetree.parser.core import SceneParser

__all__ = ["DEFAULT_SCENE_FORMAT", "SceneFormat", "SceneParser"]
