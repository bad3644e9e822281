"""
git_streak Package
==================

Turns a year of daily contribution counts into a snake game played on the
7 x 53 contribution calendar. This package contains:

- Date/grid building from (date, count) records
- Snake movement and collision rules
- The tick-based game engine and its action reducer
- Synthetic contribution datasets
- Numpy snapshots, a solid renderer and a Gymnasium wrapper

All tunable parameters are in game_config.yaml.
"""
