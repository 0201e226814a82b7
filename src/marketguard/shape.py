"""Shape checks for whole index documents and pr plugin entries.

Every rule is checked independently and each failure is recorded, so a
single run lists all problems in a submission.
"""

from typing import Any

from marketguard.config import PR_LABEL
from marketguard.index_schema import (
    is_non_empty_string,
    is_schema_version,
    is_valid_plugin_id,
)
from marketguard.urls import is_https, parse_url
from marketguard.validation import ValidationResult


def display_id(value: Any) -> str:
    """Render an id or version for messages, falling back to 'unknown'."""
    if isinstance(value, bool) or not value:
        return "unknown"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return "unknown"


def validate_index_shape(index: Any, label: str, result: ValidationResult) -> list[Any]:
    """Check the top-level fields of an index document.

    Args:
        index: The decoded JSON document.
        label: Document label used to prefix messages.
        result: Accumulator for error messages.

    Returns:
        The document's plugin entries, or an empty list if ``plugins`` is
        not an array.
    """
    fields = index if isinstance(index, dict) else {}

    if not is_schema_version(fields.get("schemaVersion")):
        result.add(f"{label}: schemaVersion must be 1")
    if not is_non_empty_string(fields.get("name")):
        result.add(f"{label}: name is required")

    plugins = fields.get("plugins")
    if not isinstance(plugins, list):
        result.add(f"{label}: plugins must be an array")
        return []
    return plugins


def check_pr_plugins(plugins: list[Any], result: ValidationResult) -> dict[str, dict[str, Any]]:
    """Check every pr plugin entry's own fields.

    Version internals are left to the per-version checks.

    Args:
        plugins: Plugin entries of the pr document.
        result: Accumulator for error messages.

    Returns:
        Plugin objects keyed by id. When an id repeats the last entry wins.
    """
    by_id: dict[str, dict[str, Any]] = {}
    seen_ids: set[str] = set()

    for plugin in plugins:
        if not isinstance(plugin, dict):
            result.add(f"{PR_LABEL}: plugin entry must be an object")
            continue

        plugin_id = plugin.get("id")
        name = display_id(plugin_id)

        if not is_valid_plugin_id(plugin_id):
            result.add(f"{PR_LABEL}: plugin id must match [a-zA-Z0-9_-]{{1,64}}")
        elif plugin_id in seen_ids:
            result.add(f'{PR_LABEL}: duplicate plugin id "{plugin_id}"')
        else:
            seen_ids.add(plugin_id)

        if not is_non_empty_string(plugin.get("name")):
            result.add(f'{PR_LABEL}: plugin "{name}" missing name')

        if "description" in plugin and not is_non_empty_string(plugin["description"]):
            result.add(f'{PR_LABEL}: plugin "{name}" description must be non-empty')

        if "readme" in plugin:
            _check_readme(name, plugin["readme"], result)

        versions = plugin.get("versions")
        if not isinstance(versions, list) or len(versions) == 0:
            result.add(f'{PR_LABEL}: plugin "{name}" must have versions')

        if isinstance(plugin_id, str):
            by_id[plugin_id] = plugin

    return by_id


def _check_readme(name: str, readme: Any, result: ValidationResult) -> None:
    text = readme.strip() if isinstance(readme, str) else None
    parts = parse_url(text)
    if parts is None:
        result.add(f'{PR_LABEL}: plugin "{name}" readme must be a valid url')
    elif not is_https(parts):
        result.add(f'{PR_LABEL}: plugin "{name}" readme must use https')
