from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger("codemenu_mcp")

DEFAULT_API_URL = "http://127.0.0.1:1300/v1"

AUTH_MODES = ("query", "bearer")
LOOKUP_MODES = ("scan", "direct")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class CodeMenuSettings:
    """Runtime configuration for talking to the CodeMenu API."""

    api_url: str = DEFAULT_API_URL
    api_key: str | None = None
    auth_mode: str = "query"
    lookup_mode: str = "scan"
    enable_writes: bool = False
    # None leaves httpx to apply its own default timeout
    timeout: float | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.auth_mode not in AUTH_MODES:
            raise ValueError(f"auth_mode must be one of {AUTH_MODES}, got {self.auth_mode!r}")
        if self.lookup_mode not in LOOKUP_MODES:
            raise ValueError(
                f"lookup_mode must be one of {LOOKUP_MODES}, got {self.lookup_mode!r}"
            )
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "api_url", self.api_url.rstrip("/"))

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def query_auth(self) -> dict[str, str]:
        if self.api_key and self.auth_mode == "query":
            return {"key": self.api_key}
        return {}

    def header_auth(self) -> dict[str, str]:
        if self.api_key and self.auth_mode == "bearer":
            return {"Authorization": f"Bearer {self.api_key}"}
        return {}

    @classmethod
    def from_env(cls) -> "CodeMenuSettings":
        def _optional_float(name: str) -> float | None:
            raw = os.getenv(name)
            if not raw:
                return None
            try:
                value = float(raw)
            except ValueError:
                logger.warning("Invalid number for %s: %s", name, raw)
                return None
            if value <= 0:
                logger.warning("Non-positive value for %s: %s", name, raw)
                return None
            return value

        def _bool_env(name: str, default: bool) -> bool:
            raw = os.getenv(name)
            if not raw:
                return default
            lowered = raw.strip().lower()
            if lowered in _TRUTHY:
                return True
            if lowered in _FALSY:
                return False
            logger.warning("Invalid boolean for %s: %s", name, raw)
            return default

        def _choice_env(name: str, choices: tuple[str, ...], default: str) -> str:
            raw = os.getenv(name)
            if not raw:
                return default
            lowered = raw.strip().lower()
            if lowered not in choices:
                logger.warning("Invalid value for %s: %s (expected one of %s)", name, raw, choices)
                return default
            return lowered

        return cls(
            api_url=os.getenv("CODEMENU_API_URL") or DEFAULT_API_URL,
            api_key=os.getenv("CODEMENU_API_KEY") or None,
            auth_mode=_choice_env("CODEMENU_AUTH_MODE", AUTH_MODES, "query"),
            lookup_mode=_choice_env("CODEMENU_LOOKUP_MODE", LOOKUP_MODES, "scan"),
            enable_writes=_bool_env("CODEMENU_ENABLE_WRITES", False),
            timeout=_optional_float("CODEMENU_TIMEOUT"),
            log_level=os.getenv("CODEMENU_LOG_LEVEL", "INFO").upper(),
        )


__all__ = ["CodeMenuSettings", "DEFAULT_API_URL"]
