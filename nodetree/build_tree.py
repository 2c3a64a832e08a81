#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from nodetree.errors import InvalidProjectError, SceneError
from nodetree.exporter import node_to_dict
from nodetree.parser import DEFAULT_SCENE_FORMAT, SceneParser


PROJECT_FILE_NAME = "project.godot"
CACHE_DIR_NAME = ".godot"

logger = logging.getLogger(__name__)


def validate_project_dir(project_dir: Path) -> Path:
    if not project_dir.is_dir() or not (project_dir / PROJECT_FILE_NAME).is_file():
        raise InvalidProjectError(str(project_dir))
    return project_dir.resolve()


def collect_scene_files(
    project_dir: Path, extension: str = DEFAULT_SCENE_FORMAT.scene_extension
) -> List[Path]:
    scene_files = []
    for path in sorted(project_dir.rglob(f"*{extension}")):
        rel = path.relative_to(project_dir)
        if CACHE_DIR_NAME in rel.parts or not path.is_file():
            continue
        scene_files.append(path)
    return scene_files


def build_scene_trees(project_dir: Path) -> Dict[str, Any]:
    """Parse every scene of a project, keyed by its ``res://`` path."""
    project_dir = validate_project_dir(project_dir)
    parser = SceneParser()
    trees: Dict[str, Any] = {}
    for scene_path in collect_scene_files(project_dir, parser.scene_format.scene_extension):
        rel = scene_path.relative_to(project_dir).as_posix()
        logger.info("Parsing scene %s", rel)
        source = scene_path.read_text(encoding="utf-8")
        root = parser.parse(source, source_path=rel)
        trees[parser.scene_format.scene_prefix + rel] = node_to_dict(root)
    return trees


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Parse every scene file of a Godot project into a typed node tree "
            "and emit the trees as JSON."
        )
    )
    parser.add_argument(
        "project",
        nargs="?",
        default=".",
        help="Path to the project root (the directory holding project.godot).",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="File to write the JSON to. Printed to stdout when omitted.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every parsed line and skipped declaration.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        trees = build_scene_trees(Path(args.project))
    except (SceneError, OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    payload = json.dumps(trees, indent=2, sort_keys=True)
    if args.output is None:
        print(payload)
        return 0

    output_path = Path(args.output).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(payload, encoding="utf-8")
    print(f"Generated scene trees: {output_path}")
    for scene in trees:
        print(f"- {scene}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
