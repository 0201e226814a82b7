"""Marketplace index schema definitions.

The index is checked field by field so that every problem is reported,
so only the fixed-shape fragments of a version (``entry`` and ``dist``)
are modelled with Pydantic. The remaining rules are expressed as
constants and small predicates used by the checking stages.
"""

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Only schema version accepted for the index document
INDEX_SCHEMA_VERSION = 1

# Plugin ids: letters, digits, underscore and hyphen, 1-64 characters
PLUGIN_ID_PATTERN = re.compile(r"[a-zA-Z0-9_-]{1,64}")

# Lowercase hex SHA-256 digest
SHA256_PATTERN = r"^[a-f0-9]{64}$"

# Entry files must live in the packaged dist/ directory
ENTRY_PATH_PREFIX = "dist/"

# Suffix required on dist.url paths
DIST_URL_SUFFIX = ".tgz"


def is_non_empty_string(value: Any) -> bool:
    """True if value is a string that is not blank after trimming."""
    return isinstance(value, str) and value.strip() != ""


def is_valid_plugin_id(value: Any) -> bool:
    """True if value is a plugin id matching PLUGIN_ID_PATTERN."""
    return is_non_empty_string(value) and PLUGIN_ID_PATTERN.fullmatch(value) is not None


def is_json_integer(value: Any) -> bool:
    """True if value is a JSON integer (booleans excluded, 1.0 included)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def is_schema_version(value: Any) -> bool:
    """True if value is the supported index schema version."""
    return is_json_integer(value) and value == INDEX_SCHEMA_VERSION


class EntrySpec(BaseModel):
    """The file a plugin version loads from its package."""

    model_config = ConfigDict(strict=True)

    type: Literal["file"] = Field(description="Entry kind, always 'file'")
    path: str = Field(description="Path inside the package, under dist/")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate the path is non-blank and under dist/."""
        if not is_non_empty_string(v) or not v.startswith(ENTRY_PATH_PREFIX):
            msg = f"path must start with '{ENTRY_PATH_PREFIX}'"
            raise ValueError(msg)
        return v


class DistSpec(BaseModel):
    """The downloadable package of a plugin version."""

    model_config = ConfigDict(strict=True)

    type: Literal["tgz"] = Field(description="Archive kind, always 'tgz'")
    url: str = Field(description="HTTPS URL of the .tgz archive")
    sha256: str = Field(
        pattern=SHA256_PATTERN,
        description="Hex SHA-256 of the archive, normalised to lowercase",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate the url is non-blank."""
        if not is_non_empty_string(v):
            msg = "url must be a non-empty string"
            raise ValueError(msg)
        return v

    @field_validator("sha256", mode="before")
    @classmethod
    def lowercase_sha256(cls, v: Any) -> Any:
        """Accept digests in any case."""
        if isinstance(v, str):
            return v.lower()
        return v
