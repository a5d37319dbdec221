# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.
"""Central pipecheck configuration.

All values have sensible defaults and can be overridden via environment variables
using the ``PIPECHECK_`` prefix:

  PIPECHECK_KUBECONFIG            kubeconfig file passed to kubectl (optional)
  PIPECHECK_CONTEXT               kubeconfig context (optional)
  PIPECHECK_KUBECTL               kubectl binary (default: kubectl)
  PIPECHECK_API_GROUP             Tekton API group (default: tekton.dev)
  PIPECHECK_API_VERSION           Tekton API version (default: v1beta1)
  PIPECHECK_DEFAULT_NAMESPACE     Namespace of manifests without one (default: default)
  PIPECHECK_REQUEST_TIMEOUT       Seconds allowed per kubectl call (default: 30)
  PIPECHECK_LOG_LEVEL             Log level (default: WARNING)
  PIPECHECK_LOG_FILE              Also log to this file (optional)
  PIPECHECK_MAX_LOG_FILE_BYTES    Max bytes per log file (optional)
  PIPECHECK_LOG_BACKUP_COUNT      Log rotation backup count (optional)

Command-line flags take precedence over these values.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"})
_VALID_API_VERSIONS = frozenset({"v1beta1", "v1"})
# RFC 1123 label, which is what Kubernetes accepts for namespace names.
_NAMESPACE_RE = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")


class PipecheckConfig(BaseSettings):
    """Central pipecheck configuration.

    Instantiate with ``PipecheckConfig()`` to read defaults and any
    ``PIPECHECK_*`` environment variable overrides automatically.
    """

    model_config = SettingsConfigDict(env_prefix="PIPECHECK_")

    # ── Cluster access ─────────────────────────────────────────────────────
    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    kubectl: str = "kubectl"
    request_timeout: int = 30

    # ── Tekton resources ───────────────────────────────────────────────────
    api_group: str = "tekton.dev"
    api_version: str = "v1beta1"
    default_namespace: str = "default"

    # ── Logging configuration ──────────────────────────────────────────────
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    max_log_file_bytes: Optional[int] = None
    log_backup_count: Optional[int] = None

    # ── Validators ─────────────────────────────────────────────────────────

    @field_validator("kubectl", "api_group")
    @classmethod
    def _not_empty(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @field_validator("api_version")
    @classmethod
    def _valid_api_version(cls, v: str) -> str:
        if v not in _VALID_API_VERSIONS:
            raise ValueError(
                f"api_version={v!r} is not supported. "
                f"Valid values: {', '.join(sorted(_VALID_API_VERSIONS))}"
            )
        return v

    @field_validator("default_namespace")
    @classmethod
    def _valid_namespace(cls, v: str) -> str:
        if not _NAMESPACE_RE.match(v) or len(v) > 63:
            raise ValueError(f"default_namespace={v!r} is not a valid namespace name")
        return v

    @field_validator("request_timeout")
    @classmethod
    def _valid_timeout(cls, v: int) -> int:
        if not (1 <= v <= 3600):
            raise ValueError(f"request_timeout={v} is outside the valid range (1-3600)")
        return v

    @field_validator("log_level")
    @classmethod
    def _valid_log_level(cls, v: str) -> str:
        if v.upper() not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level={v!r} is not a valid log level. "
                f"Valid values: {', '.join(sorted(_VALID_LOG_LEVELS))}"
            )
        return v.upper()

    @field_validator("max_log_file_bytes", "log_backup_count")
    @classmethod
    def _non_negative(cls, v: Optional[int], info) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError(f"{info.field_name}={v} must be >= 0")
        return v


def load_and_validate_config() -> PipecheckConfig:
    """Build, validate and return the config.

    Raises ``pydantic.ValidationError`` if any value is invalid. Called once
    at CLI startup so config errors surface before kubectl is ever run.
    """
    return PipecheckConfig()
