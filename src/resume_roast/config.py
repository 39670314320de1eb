"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    parse_model: str = "claude-haiku-4-5-20251001"
    max_retries: int = 3
    timeout: int = 120
    base_delay: float = 1.0

    def __post_init__(self) -> None:
        _check_range("max_retries", self.max_retries, 0, 10)
        _check_range("timeout", self.timeout, 1, 600)
        _check_range("base_delay", self.base_delay, 0, 60)


@dataclass(frozen=True)
class GenerationConfig:
    resume_temperature: float = 0.2
    resume_max_tokens: int = 3000
    cover_letter_temperature: float = 0.4
    cover_letter_max_tokens: int = 1500
    roast_temperature: float = 0.7
    roast_max_tokens: int = 4096
    parse_max_tokens: int = 4096
    analyze_max_tokens: int = 2048

    def __post_init__(self) -> None:
        for name in ("resume_temperature", "cover_letter_temperature", "roast_temperature"):
            _check_range(name, getattr(self, name), 0.0, 1.0)


@dataclass(frozen=True)
class LimitsConfig:
    backend: str = "memory"  # "memory" | "sqlite"
    db_path: str = "~/.resume-roast/ratelimit.db"
    window_seconds: int = 60
    roast: int = 10
    generate: int = 5
    parse: int = 10
    analyze: int = 10

    def __post_init__(self) -> None:
        if self.backend not in ("memory", "sqlite"):
            raise ValueError(f"limits backend must be 'memory' or 'sqlite', got {self.backend!r}")
        _check_range("window_seconds", self.window_seconds, 1, 86400)
        for name in ("roast", "generate", "parse", "analyze"):
            _check_range(name, getattr(self, name), 1, 10000)

    def for_endpoint(self, endpoint: str) -> int:
        return getattr(self, endpoint)

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class ValidationConfig:
    resume_min_chars: int = 10
    resume_max_chars: int = 100_000
    jd_min_chars: int = 10
    jd_max_chars: int = 50_000


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.resume-roast/resumes.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        generation=GenerationConfig(**raw.get("generation", {})),
        limits=LimitsConfig(**raw.get("limits", {})),
        validation=ValidationConfig(**raw.get("validation", {})),
        storage=StorageConfig(**raw.get("storage", {})),
    )
