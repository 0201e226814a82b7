"""Append-only checks between the base and pr index documents.

Once a version is published its canonical content is frozen. Plugins can
be added but never removed, and the index name never changes.
"""

from typing import Any

from marketguard.canonical import canonical_equal
from marketguard.config import PR_LABEL
from marketguard.index_schema import is_non_empty_string
from marketguard.validation import ValidationResult


def index_plugins_by_id(plugins: list[Any]) -> dict[str, dict[str, Any]]:
    """Map base plugin entries by id, skipping entries without a usable id."""
    by_id: dict[str, dict[str, Any]] = {}
    for plugin in plugins:
        if isinstance(plugin, dict) and is_non_empty_string(plugin.get("id")):
            by_id[plugin["id"]] = plugin
    return by_id


def index_versions(plugin: dict[str, Any] | None) -> dict[str, dict[str, Any]]:
    """Map a plugin's version objects by version string."""
    by_version: dict[str, dict[str, Any]] = {}
    if plugin is None or not isinstance(plugin.get("versions"), list):
        return by_version
    for version in plugin["versions"]:
        if isinstance(version, dict) and is_non_empty_string(version.get("version")):
            by_version[version["version"]] = version
    return by_version


def check_name_unchanged(base: Any, pr: Any, result: ValidationResult) -> None:
    """Record an error if the top-level index name differs."""
    base_name = base.get("name") if isinstance(base, dict) else None
    pr_name = pr.get("name") if isinstance(pr, dict) else None
    if base_name != pr_name:
        result.add(f"{PR_LABEL}: top-level name cannot be changed")


def check_no_removed_plugins(
    base_plugins: dict[str, dict[str, Any]],
    pr_plugins: dict[str, dict[str, Any]],
    result: ValidationResult,
) -> None:
    """Record an error for every base plugin id missing from pr."""
    for plugin_id in base_plugins:
        if plugin_id not in pr_plugins:
            result.add(f'{PR_LABEL}: plugin "{plugin_id}" removed')


def check_version_unchanged(
    label: str,
    base_version: dict[str, Any],
    pr_version: dict[str, Any],
    result: ValidationResult,
) -> None:
    """Record an error if an existing version's canonical content changed."""
    if not canonical_equal(base_version, pr_version):
        result.add(f'{PR_LABEL}: version "{label}" modifies existing version')


def check_no_removed_versions(
    base_plugins: dict[str, dict[str, Any]],
    pr_plugins: dict[str, dict[str, Any]],
    result: ValidationResult,
) -> None:
    """Record an error for every published version missing from its pr plugin.

    Plugins that were removed entirely are reported by
    check_no_removed_plugins and skipped here.
    """
    for plugin_id, base_plugin in base_plugins.items():
        pr_plugin = pr_plugins.get(plugin_id)
        if pr_plugin is None:
            continue
        pr_versions = index_versions(pr_plugin)
        for version_string in index_versions(base_plugin):
            if version_string not in pr_versions:
                result.add(f'{PR_LABEL}: version "{plugin_id}/{version_string}" removed')
