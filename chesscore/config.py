"""Configuration loading utilities."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from omegaconf import OmegaConf

from .search import DEFAULT_DEPTHS


@dataclass
class EngineConfig:
    """Engine settings shared by the CLI and the HTTP API."""

    difficulty_depths: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_DEPTHS))
    default_difficulty: str = "medium"
    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self) -> None:
        for name, depth in self.difficulty_depths.items():
            if not isinstance(depth, int) or depth < 1:
                msg = f"Search depth for {name!r} must be a positive integer, got {depth!r}"
                raise ValueError(msg)
        if self.default_difficulty not in self.difficulty_depths:
            msg = f"default_difficulty {self.default_difficulty!r} has no configured depth"
            raise ValueError(msg)


def load_config(config_path: str | Path | None = None, overrides: list[str] | None = None) -> EngineConfig:
    """Build an :class:`EngineConfig` from defaults, a YAML file and overrides.

    Args:
        config_path: Optional path to a YAML configuration file.
        overrides: Optional CLI-style overrides (e.g. ``["difficulty_depths.hard=4"]``).

    Returns:
        The validated configuration.
    """
    config = OmegaConf.create(asdict(EngineConfig()))

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            msg = f"Config file not found: {config_path}"
            raise FileNotFoundError(msg)
        config = OmegaConf.merge(config, OmegaConf.load(config_path))

    if overrides:
        config = OmegaConf.merge(config, OmegaConf.from_dotlist(overrides))

    data: dict[str, Any] = OmegaConf.to_container(config, resolve=True)  # type: ignore[assignment]
    try:
        return EngineConfig(**data)
    except TypeError as exc:
        msg = f"Unknown configuration key: {exc}"
        raise ValueError(msg) from exc
