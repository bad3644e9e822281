"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from git_streak.streak_core.snake import DIRECTIONS


@dataclass(frozen=True)
class TimingConfig:
    """Driver timing settings."""
    tick_interval_ms: int        # Milliseconds between Tick events

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000.0


@dataclass(frozen=True)
class SnakeConfig:
    """Snake growth policy."""
    growth_every: int            # 0 disables growth


@dataclass(frozen=True)
class DatasetProfile:
    """Parameters for one synthetic activity profile."""
    name: str
    label: str
    description: str
    streak_chance: float
    streak_length: Tuple[int, int]
    streak_commits: Tuple[int, int]
    active_chance: float
    commits: Tuple[int, int]


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits."""
    max_ticks: int


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters."""
    max_snake_length: int


@dataclass(frozen=True)
class RenderConfig:
    """Solid renderer colours and geometry."""
    cell_size: int
    cell_gap: int
    background_color: Tuple[int, int, int]
    collected_color: Tuple[int, int, int]
    snake_head_color: Tuple[int, int, int]
    snake_body_color: Tuple[int, int, int]
    level_colors: Tuple[Tuple[int, int, int], ...]


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    timing: TimingConfig
    snake: SnakeConfig
    controls: Tuple[Tuple[str, str], ...]   # (key name, direction) pairs
    datasets: Tuple[DatasetProfile, ...]
    caps: CapsConfig
    observation: ObservationConfig
    render: RenderConfig

    @property
    def key_map(self) -> Dict[str, str]:
        """Key name to direction lookup."""
        return dict(self.controls)

    @property
    def dataset_names(self) -> Tuple[str, ...]:
        """Names of all configured activity profiles."""
        return tuple(d.name for d in self.datasets)

    def get_dataset(self, name: str) -> DatasetProfile:
        """Get an activity profile by name."""
        for profile in self.datasets:
            if profile.name == name:
                return profile
        raise ValueError(f"Unknown dataset: {name}")


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_range(range_data: List, label: str) -> Tuple[int, int]:
    """Parse an inclusive [low, high] integer range from YAML."""
    if len(range_data) != 2:
        raise ValueError(f"{label} must have 2 values [low, high], got {range_data}")
    low, high = int(range_data[0]), int(range_data[1])
    if low > high:
        raise ValueError(f"{label} range is inverted: [{low}, {high}]")
    return (low, high)


def _parse_dataset(name: str, data: dict) -> DatasetProfile:
    """Parse a single activity profile from YAML."""
    return DatasetProfile(
        name=str(name),
        label=str(data.get("label", name)),
        description=str(data.get("description", "")),
        streak_chance=float(data.get("streak_chance", 0.0)),
        streak_length=_parse_range(data.get("streak_length", [0, 0]), f"{name}.streak_length"),
        streak_commits=_parse_range(data.get("streak_commits", [0, 0]), f"{name}.streak_commits"),
        active_chance=float(data["active_chance"]),
        commits=_parse_range(data["commits"], f"{name}.commits")
    )


def _parse_controls(controls_data: dict) -> Tuple[Tuple[str, str], ...]:
    """Flatten direction -> [keys] into (key, direction) pairs."""
    pairs = []
    seen = {}
    for direction, keys in controls_data.items():
        direction = str(direction).upper()
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown control direction: {direction}")
        for key in keys:
            key = str(key)
            if key in seen:
                raise ValueError(
                    f"Key '{key}' bound to both {seen[key]} and {direction}"
                )
            seen[key] = direction
            pairs.append((key, direction))
    return tuple(pairs)


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.timing.tick_interval_ms <= 0:
        raise ValueError(
            f"tick_interval_ms must be positive, got {config.timing.tick_interval_ms}"
        )

    if config.snake.growth_every < 0:
        raise ValueError(f"growth_every must be >= 0, got {config.snake.growth_every}")

    # Every profile needs sane probabilities and positive commit counts
    for profile in config.datasets:
        for label, chance in (("streak_chance", profile.streak_chance),
                              ("active_chance", profile.active_chance)):
            if not 0.0 <= chance <= 1.0:
                raise ValueError(f"{profile.name}.{label} must be in [0, 1], got {chance}")
        if profile.commits[0] < 1:
            raise ValueError(f"{profile.name}.commits must start at 1 or more, got {profile.commits}")
        if profile.streak_chance > 0 and profile.streak_length[0] < 1:
            raise ValueError(f"{profile.name}.streak_length must start at 1 or more when streaks are enabled")
        if profile.streak_chance > 0 and profile.streak_commits[0] < 1:
            raise ValueError(f"{profile.name}.streak_commits must start at 1 or more when streaks are enabled")

    if "medium" not in config.dataset_names:
        raise ValueError("datasets must define a 'medium' profile (used as fallback)")

    if config.caps.max_ticks <= 0:
        raise ValueError(f"max_ticks must be positive, got {config.caps.max_ticks}")

    if config.observation.max_snake_length <= 0:
        raise ValueError(
            f"max_snake_length must be positive, got {config.observation.max_snake_length}"
        )

    if len(config.render.level_colors) != 5:
        raise ValueError(
            f"level_colors must have 5 entries (levels 0-4), got {len(config.render.level_colors)}"
        )

    if config.render.cell_size <= 0 or config.render.cell_gap < 0:
        raise ValueError("cell_size must be positive and cell_gap non-negative")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    timing_data = raw.get("timing", {})
    timing = TimingConfig(
        tick_interval_ms=int(timing_data.get("tick_interval_ms", 150))
    )

    snake_data = raw.get("snake", {})
    snake = SnakeConfig(
        growth_every=int(snake_data.get("growth_every", 0))
    )

    controls = _parse_controls(raw.get("controls", {}))

    datasets = tuple(
        _parse_dataset(name, data)
        for name, data in raw["datasets"].items()
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_ticks=int(caps_data.get("max_ticks", 5000))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_snake_length=int(obs_data.get("max_snake_length", 371))
    )

    render_data = raw["render"]
    render = RenderConfig(
        cell_size=int(render_data.get("cell_size", 12)),
        cell_gap=int(render_data.get("cell_gap", 3)),
        background_color=_parse_color(render_data["background_color"]),
        collected_color=_parse_color(render_data["collected_color"]),
        snake_head_color=_parse_color(render_data["snake_head_color"]),
        snake_body_color=_parse_color(render_data["snake_body_color"]),
        level_colors=tuple(_parse_color(c) for c in render_data["level_colors"])
    )

    config = GameConfig(
        timing=timing,
        snake=snake,
        controls=controls,
        datasets=datasets,
        caps=caps,
        observation=observation,
        render=render
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
