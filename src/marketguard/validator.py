"""Validation of a proposed marketplace index change.

Runs every stage in a fixed order against one shared error list:

1. Shape of the base and pr documents
2. Top-level name, pr plugin entries, removed plugins and versions
3. Per-version checks, including canonical comparison of existing versions
4. Download and digest verification of new versions' artifacts
"""

import json
from pathlib import Path
from typing import Any

from marketguard.config import BASE_LABEL, PR_LABEL
from marketguard.errors import IndexDocumentError
from marketguard.immutability import (
    check_name_unchanged,
    check_no_removed_plugins,
    check_no_removed_versions,
    index_plugins_by_id,
)
from marketguard.integrity import ArtifactSource, verify_artifacts
from marketguard.novelty import collect_new_artifacts
from marketguard.shape import check_pr_plugins, validate_index_shape
from marketguard.validation import ValidationResult


def load_index_document(path: Path) -> Any:
    """Read and decode a UTF-8 JSON index document.

    Raises:
        OSError: If the file cannot be read.
        IndexDocumentError: If the content is not valid UTF-8 JSON.
    """
    raw = path.read_bytes()
    try:
        return json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except UnicodeDecodeError as e:
        raise IndexDocumentError(str(path), f"not UTF-8 ({e.reason})") from e
    except ValueError as e:
        raise IndexDocumentError(str(path), str(e)) from e


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    msg = f"invalid constant {name}"
    raise ValueError(msg)


def validate_marketplace_change(
    base: Any, pr: Any, source: ArtifactSource
) -> ValidationResult:
    """Validate that pr is a safe, append-only update of base.

    Args:
        base: Decoded base (current) index document.
        pr: Decoded pr (proposed) index document.
        source: Used to download new versions' artifacts.

    Returns:
        ValidationResult holding every error found, in discovery order.
    """
    result = ValidationResult()

    base_entries = validate_index_shape(base, BASE_LABEL, result)
    pr_entries = validate_index_shape(pr, PR_LABEL, result)

    check_name_unchanged(base, pr, result)

    base_plugins = index_plugins_by_id(base_entries)
    pr_plugins = check_pr_plugins(pr_entries, result)
    check_no_removed_plugins(base_plugins, pr_plugins, result)
    check_no_removed_versions(base_plugins, pr_plugins, result)

    queue = collect_new_artifacts(pr_entries, base_plugins, result)
    verify_artifacts(queue, source, result)

    return result
