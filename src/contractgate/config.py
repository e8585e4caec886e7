"""
Configuration for contract checks.

Configuration sources (in order of precedence):
1. Explicit constructor arguments (CLI flags)
2. Environment variables (CONTRACTGATE_*)
3. Default values

Example:
    from contractgate.config import CheckConfig

    config = CheckConfig()                      # defaults + environment
    config = CheckConfig(base_ref="origin/dev") # override at runtime
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CheckConfig(BaseSettings):
    """
    Settings for `contractgate check`.

    All settings can be overridden via environment variables
    prefixed with CONTRACTGATE_.

    Example:
        export CONTRACTGATE_BASE_REF=origin/release
        export CONTRACTGATE_SCHEMA_PREFIX=api/schema/
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTRACTGATE_",
        extra="ignore",
    )

    base_ref: str = Field(
        default="origin/main",
        description="Git ref holding the old revision of the contract",
    )
    schema_prefix: str = Field(
        default="contracts/schema/",
        description="Repository-relative prefix selecting schema files among changed files",
    )
    package_manifest: str = Field(
        default="contracts/package.json",
        description="Repository-relative path of the contract package manifest (holds `version`)",
    )
    default_old_version: str = Field(
        default="0.0.0",
        description="Old version assumed when the manifest does not exist at the base ref",
    )
    repo_root: Path = Field(
        default_factory=Path.cwd,
        description="Working tree of the repository being checked",
    )

    @field_validator("schema_prefix", "package_manifest")
    @classmethod
    def normalize_repo_path(cls, v: str) -> str:
        """Git reports forward-slash paths without a leading './'."""
        v = v.replace("\\", "/")
        while v.startswith("./"):
            v = v[2:]
        return v

    @field_validator("base_ref")
    @classmethod
    def validate_base_ref(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("base_ref must not be empty")
        return v.strip()
