"""
Meta-directive grammar table.

The directives are declared in meta_directives.yaml next to this module
and loaded once on first use.
"""

from functools import lru_cache
from pathlib import Path

import yaml

from httpls.completion.candidate import MetaDirective


META_DIRECTIVES_FILE = Path(__file__).parent / "meta_directives.yaml"


class MetaDirectiveError(Exception):
    """Raised when the directive grammar file cannot be loaded."""


def load_meta_directives(path: Path) -> tuple[MetaDirective, ...]:
    """
    Load directive definitions from a YAML file.

    The file holds a list of mappings with 'name', 'description' and an
    optional 'completions' list.

    Raises:
        MetaDirectiveError: If the file is missing or malformed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise MetaDirectiveError(f"Cannot load {path}: {e}") from e

    if not isinstance(data, list):
        raise MetaDirectiveError(f"{path} must contain a list of directives")

    directives = []
    for entry in data:
        if not isinstance(entry, dict) or not entry.get("name"):
            raise MetaDirectiveError(f"Invalid directive entry in {path}: {entry!r}")

        completions = entry.get("completions")
        if completions is not None:
            if not isinstance(completions, list):
                raise MetaDirectiveError(
                    f"'completions' of @{entry['name']} must be a list"
                )
            completions = tuple(str(c) for c in completions)

        directives.append(
            MetaDirective(
                name=str(entry["name"]),
                description=str(entry.get("description", "")),
                completions=completions,
            )
        )

    return tuple(directives)


@lru_cache(maxsize=1)
def meta_directive_table() -> tuple[MetaDirective, ...]:
    """Known directives in declaration order."""
    return load_meta_directives(META_DIRECTIVES_FILE)
