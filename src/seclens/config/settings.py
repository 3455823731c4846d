"""Config loader from env + yaml."""

from __future__ import annotations

from pathlib import Path
import os
from typing import Any

import yaml
from pydantic import BaseModel, Field

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config" / "defaults.yaml"
ENV_PREFIX = "SECLENS_"
API_KEY_FALLBACK_ENV = ("GEMINI_API_KEY", "API_KEY")


class AppConfig(BaseModel):

    profile: str = Field(default="gemini")
    provider: str = Field(default="gemini")
    model: str = Field(default="gemini-2.5-flash")
    api_base: str | None = Field(default=None)
    api_key: str | None = Field(default=None)
    temperature: float = Field(default=0.0)
    timeout_s: float = Field(default=60.0)
    max_retries: int = Field(default=0, ge=0)
    retry_backoff_s: float = Field(default=1.0, ge=0.0)
    model_choices: list[str] = Field(default_factory=list)
    log_level: str = Field(default="INFO")
    gradio_share: bool = Field(default=False)
    default_config_path: str = Field(default=str(DEFAULT_CONFIG_PATH))


def _normalize_provider(raw: Any) -> str:
    provider = str(raw or "").strip().lower()
    if provider in {"ollama", "local"}:
        return "ollama"
    return provider or "gemini"


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    return payload if isinstance(payload, dict) else {}


def _pick_env(name: str, fallback: Any) -> Any:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    return value if value not in (None, "") else fallback


def _parse_model_choices(raw: Any) -> list[str]:
    if isinstance(raw, str):
        return list(dict.fromkeys(item.strip() for item in raw.split(",") if item.strip()))
    if isinstance(raw, list):
        return list(dict.fromkeys(str(item).strip() for item in raw if str(item).strip()))
    return []


def _parse_non_negative_int(raw: Any, fallback: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return fallback
    return value if value >= 0 else fallback


def _parse_float(raw: Any, fallback: float) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return fallback


def _parse_positive_float(raw: Any, fallback: float) -> float:
    value = _parse_float(raw, fallback)
    return value if value > 0 else fallback


def _parse_bool(raw: Any, fallback: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return fallback
    value = str(raw).strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return fallback


def _parse_str(raw: Any, fallback: str) -> str:
    value = str(raw if raw is not None else "").strip()
    return value or fallback


def _resolve_default_config_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    env_default_path = os.getenv(f"{ENV_PREFIX}DEFAULT_CONFIG_PATH")
    if env_default_path:
        return Path(env_default_path)
    return DEFAULT_CONFIG_PATH


def _resolve_api_key(selected: dict[str, Any], merged: dict[str, Any]) -> str | None:
    explicit = _pick_env("API_KEY", selected.get("api_key", merged.get("api_key")))
    if explicit:
        return str(explicit)
    for name in API_KEY_FALLBACK_ENV:
        value = os.getenv(name)
        if value:
            return value
    return None


def load_config(
    path: str | Path | None = None,
    *,
    profile_override: str | None = None,
) -> tuple[AppConfig, dict[str, Any]]:
    default_path = _resolve_default_config_path(path)
    merged = load_yaml(default_path)
    profiles = merged.get("profiles")
    profile_map = profiles if isinstance(profiles, dict) else {}

    active_profile = str(profile_override or _pick_env("PROFILE", merged.get("profile", "gemini")))
    selected_profile = profile_map.get(active_profile, {})
    selected = selected_profile if isinstance(selected_profile, dict) else {}
    # An explicitly chosen profile (CLI flag, UI dropdown) keeps its own
    # provider/model and ignores the selector env vars.
    use_selector_env = profile_override is None

    def _pick_selector_env(name: str, fallback: Any) -> Any:
        if use_selector_env:
            return _pick_env(name, fallback)
        return fallback

    def _setting(name: str, default: Any) -> Any:
        return _pick_env(name.upper(), selected.get(name, merged.get(name, default)))

    selected_provider = _normalize_provider(
        _pick_selector_env("PROVIDER", selected.get("provider", merged.get("provider", active_profile)))
    )
    selected_model = _parse_str(
        _pick_selector_env("MODEL", selected.get("model", merged.get("model", "gemini-2.5-flash"))),
        "gemini-2.5-flash",
    )
    parsed_choices = _parse_model_choices(
        _pick_selector_env("MODEL_CHOICES", selected.get("model_choices", merged.get("model_choices", [])))
    )
    if selected_model not in parsed_choices:
        parsed_choices.insert(0, selected_model)

    payload = {
        "profile": active_profile,
        "provider": selected_provider,
        "model": selected_model,
        "api_base": _pick_selector_env("API_BASE", selected.get("api_base", merged.get("api_base"))),
        "api_key": _resolve_api_key(selected, merged),
        "temperature": _parse_float(_setting("temperature", 0.0), 0.0),
        "timeout_s": _parse_positive_float(_setting("timeout_s", 60.0), 60.0),
        "max_retries": _parse_non_negative_int(_setting("max_retries", 0), 0),
        "retry_backoff_s": max(0.0, _parse_float(_setting("retry_backoff_s", 1.0), 1.0)),
        "model_choices": parsed_choices,
        "log_level": _parse_str(_setting("log_level", "INFO"), "INFO").upper(),
        "gradio_share": _parse_bool(_setting("gradio_share", False), False),
        "default_config_path": str(default_path),
    }

    cfg = AppConfig.model_validate(payload)
    return cfg, merged
