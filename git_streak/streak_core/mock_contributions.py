"""
Mock Contributions
==================

Seeded synthetic contribution datasets for sample gameplay.

Each profile mixes idle days (active with ``active_chance``) and streaks
(started with ``streak_chance`` and lasting ``streak_length`` days). The
same seed and anchor date always produce the same dataset.
"""

from __future__ import annotations

import random
from datetime import date
from typing import Dict, List, Optional

from git_streak.streak_core.config_loader import DatasetProfile, GameConfig, get_config
from git_streak.streak_core.contributions import ContributionDay
from git_streak.streak_core.date_utils import generate_last_365_days

DEFAULT_DATASET = "medium"


class MockContributionGenerator:
    """
    Generates activity for the trailing 365 days from a named profile.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize generator.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)

    def reset(self, seed: Optional[int] = None) -> None:
        """Reseed the generator."""
        self._rng = random.Random(seed)

    def _profile(self, kind: str) -> DatasetProfile:
        """Look up a profile, falling back to the default one."""
        if kind not in self._config.dataset_names:
            kind = DEFAULT_DATASET
        return self._config.get_dataset(kind)

    def generate(
        self,
        kind: str = DEFAULT_DATASET,
        today: Optional[date] = None
    ) -> List[ContributionDay]:
        """
        Generate one dataset.

        Args:
            kind: Profile name ("light", "medium", "heavy"). Unknown names
                use "medium".
            today: Anchor date. Defaults to the current date.

        Returns:
            365 ContributionDay values, oldest first.
        """
        profile = self._profile(kind)
        rng = self._rng

        contributions = []
        streak_left = 0

        for day in generate_last_365_days(today):
            count = 0

            if streak_left == 0 and profile.streak_chance > 0 and rng.random() < profile.streak_chance:
                streak_left = rng.randint(*profile.streak_length)

            if streak_left > 0:
                count = rng.randint(*profile.streak_commits)
                streak_left -= 1
            elif rng.random() < profile.active_chance:
                count = rng.randint(*profile.commits)

            contributions.append(ContributionDay(date=day, count=count))

        return contributions


def get_mock_contributions(
    kind: str = DEFAULT_DATASET,
    seed: Optional[int] = None,
    today: Optional[date] = None,
    config: Optional[GameConfig] = None
) -> List[ContributionDay]:
    """Generate a dataset in one call."""
    return MockContributionGenerator(config, seed).generate(kind, today)


def get_mock_datasets(config: Optional[GameConfig] = None) -> List[Dict[str, str]]:
    """Profile metadata for dataset pickers."""
    if config is None:
        config = get_config()
    return [
        {"type": p.name, "label": p.label, "description": p.description}
        for p in config.datasets
    ]
