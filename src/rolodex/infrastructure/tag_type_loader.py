"""Load and validate the YAML file of default tag types."""

import os
from pathlib import Path

import yaml

from rolodex.domain import Prefix, TagType, TagTypeRegistry


def get_tag_types_path() -> Path:
    """Return path to the default tag types YAML (ROLODEX_TAG_TYPES_PATH env or the packaged file)."""
    default = Path(__file__).resolve().parent / "tag_types.yaml"
    path = os.environ.get("ROLODEX_TAG_TYPES_PATH", "").strip()
    if path:
        return Path(path).expanduser().resolve()
    return default


def load_tag_types(path: Path | None = None) -> TagTypeRegistry:
    """Load the YAML file and return a fresh registry. Raises ValueError on a malformed file."""
    if path is None:
        path = get_tag_types_path()
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw)
    if not isinstance(data, dict):
        raise ValueError("Tag types YAML must be a dict")
    entries = data.get("tag_types")
    if not isinstance(entries, list):
        raise ValueError("Tag types YAML must have a 'tag_types' list")
    tag_types = []
    for entry in entries:
        if not isinstance(entry, dict) or "name" not in entry or "prefix" not in entry:
            raise ValueError("Every tag type must have 'name' and 'prefix'")
        tag_types.append(TagType(str(entry["name"]), Prefix(str(entry["prefix"]))))
    return TagTypeRegistry(tag_types)
