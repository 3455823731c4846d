"""Backend invoker adapters."""

from seclens.config.settings import AppConfig
from seclens.providers.base import Invoker
from seclens.providers.llm_gemini import GeminiInvoker
from seclens.providers.llm_ollama import OllamaInvoker


def build_invoker(cfg: AppConfig) -> Invoker:
    provider = (cfg.provider or "gemini").strip().lower()
    if provider == "ollama":
        return OllamaInvoker(
            model=cfg.model,
            api_base=cfg.api_base,
            temperature=cfg.temperature,
            timeout_s=cfg.timeout_s,
            max_retries=cfg.max_retries,
            retry_backoff_s=cfg.retry_backoff_s,
        )
    if provider != "gemini":
        raise ValueError(f"unsupported provider: {cfg.provider!r}")
    return GeminiInvoker(
        model=cfg.model,
        api_key=cfg.api_key,
        api_base=cfg.api_base,
        temperature=cfg.temperature,
        timeout_s=cfg.timeout_s,
        max_retries=cfg.max_retries,
        retry_backoff_s=cfg.retry_backoff_s,
    )


__all__ = ["GeminiInvoker", "Invoker", "OllamaInvoker", "build_invoker"]
