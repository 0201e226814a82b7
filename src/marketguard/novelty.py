"""Per-version checks and collection of newly published artifacts.

Walks every version of every pr plugin. Versions that already exist in
base are compared against their published content; genuinely new versions
with a well-formed ``dist`` block are queued for integrity verification.
"""

from typing import Any

from pydantic import ValidationError

from marketguard.config import PR_LABEL
from marketguard.immutability import check_version_unchanged, index_versions
from marketguard.index_schema import (
    DIST_URL_SUFFIX,
    DistSpec,
    EntrySpec,
    is_json_integer,
    is_non_empty_string,
)
from marketguard.integrity import ArtifactRequest
from marketguard.shape import display_id
from marketguard.urls import is_https, parse_url
from marketguard.validation import ValidationResult


def collect_new_artifacts(
    pr_plugins: list[Any],
    base_plugins: dict[str, dict[str, Any]],
    result: ValidationResult,
) -> list[ArtifactRequest]:
    """Check every pr version and queue the artifacts of new versions.

    Args:
        pr_plugins: Plugin entries of the pr document, in document order.
        base_plugins: Base plugin objects keyed by id.
        result: Accumulator for error messages.

    Returns:
        Artifacts to verify, in the order their versions were encountered.
    """
    queue: list[ArtifactRequest] = []

    for plugin in pr_plugins:
        if not isinstance(plugin, dict):
            continue
        versions = plugin.get("versions")
        if not isinstance(versions, list):
            continue

        plugin_id = plugin.get("id")
        base_plugin = base_plugins.get(plugin_id) if isinstance(plugin_id, str) else None
        base_versions = index_versions(base_plugin)
        seen_versions: set[str] = set()

        for version in versions:
            request = _check_version(
                plugin_id, version, base_versions, seen_versions, result
            )
            if request is not None:
                queue.append(request)

    return queue


def _check_version(
    plugin_id: Any,
    version: Any,
    base_versions: dict[str, dict[str, Any]],
    seen_versions: set[str],
    result: ValidationResult,
) -> ArtifactRequest | None:
    version_string = version.get("version") if isinstance(version, dict) else None
    label = f"{display_id(plugin_id)}/{display_id(version_string)}"

    if not isinstance(version, dict):
        result.add(f'{PR_LABEL}: version "{label}" must be an object')
        return None

    if not is_non_empty_string(version_string):
        result.add(f'{PR_LABEL}: version "{label}" missing version')
    elif version_string in seen_versions:
        result.add(
            f'{PR_LABEL}: duplicate version "{version_string}" in "{display_id(plugin_id)}"'
        )
    else:
        seen_versions.add(version_string)

    _check_entry(label, version.get("entry"), result)
    dist = _check_dist(label, version.get("dist"), result)
    if "permissions" in version:
        _check_permissions(label, version["permissions"], result)

    base_version = base_versions.get(version_string) if isinstance(version_string, str) else None
    if base_version is not None:
        # Published history is compared, never re-downloaded
        check_version_unchanged(label, base_version, version, result)
        return None

    if dist is None:
        return None
    return ArtifactRequest(label=label, url=dist.url, sha256=dist.sha256)


def _check_entry(label: str, entry: Any, result: ValidationResult) -> None:
    try:
        EntrySpec.model_validate(entry)
    except ValidationError:
        result.add(f'{PR_LABEL}: version "{label}" entry must be type "file" with dist/ path')


def _check_dist(label: str, dist: Any, result: ValidationResult) -> DistSpec | None:
    """Validate a dist block.

    Returns:
        The parsed block when it is fully valid, None otherwise. Any
        failure keeps the version out of the download queue.
    """
    try:
        parsed = DistSpec.model_validate(dist)
    except ValidationError:
        result.add(f'{PR_LABEL}: version "{label}" dist must include type "tgz", url, sha256')
        return None

    parts = parse_url(parsed.url)
    if parts is None:
        result.add(f'{PR_LABEL}: version "{label}" dist.url is invalid')
        return None

    valid = True
    if not is_https(parts):
        result.add(f'{PR_LABEL}: version "{label}" dist.url must use https')
        valid = False
    if not parts.path.endswith(DIST_URL_SUFFIX):
        result.add(f'{PR_LABEL}: version "{label}" dist.url must end with {DIST_URL_SUFFIX}')
        valid = False
    return parsed if valid else None


def _check_permissions(label: str, permissions: Any, result: ValidationResult) -> None:
    if not isinstance(permissions, dict):
        result.add(f'{PR_LABEL}: version "{label}" permissions must be an object')
        return

    if "instances" in permissions:
        instances = permissions["instances"]
        if not isinstance(instances, list):
            result.add(f'{PR_LABEL}: version "{label}" permissions.instances must be an array')
        elif any(not is_json_integer(value) or value < 0 for value in instances):
            result.add(
                f'{PR_LABEL}: version "{label}" permissions.instances must be non-negative integers'
            )

    for field in ("network", "fs"):
        if field not in permissions:
            continue
        values = permissions[field]
        if not isinstance(values, list):
            result.add(f'{PR_LABEL}: version "{label}" permissions.{field} must be an array')
        elif any(not is_non_empty_string(value) for value in values):
            result.add(f'{PR_LABEL}: version "{label}" permissions.{field} must be strings')
