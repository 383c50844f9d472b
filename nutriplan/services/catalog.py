# nutriplan/services/catalog.py
"""
Static reference tables: activity levels (TDEE multipliers) and fitness goals
(calorie adjustment + macro ratios).

Both are built once at import and exposed read-only, keyed by id.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class ActivityLevel:
    id: str
    name: str
    description: str
    multiplier: float
    examples: Tuple[str, ...]


@dataclass(frozen=True)
class FitnessGoal:
    id: str
    name: str
    description: str
    calorie_adjustment: float  # fraction of TDEE, e.g. -0.2 = 20% deficit
    protein_ratio: float
    carb_ratio: float
    fat_ratio: float


_ACTIVITY_LEVELS = (
    ActivityLevel(
        id="sedentary",
        name="Sedentary",
        description="Little or no exercise",
        multiplier=1.2,
        examples=("Desk job", "Minimal walking", "No regular exercise"),
    ),
    ActivityLevel(
        id="lightly_active",
        name="Lightly Active",
        description="Light exercise 1-3 days/week",
        multiplier=1.375,
        examples=("Light jogging", "Yoga", "Walking 30min/day"),
    ),
    ActivityLevel(
        id="moderately_active",
        name="Moderately Active",
        description="Moderate exercise 3-5 days/week",
        multiplier=1.55,
        examples=("Gym 3-4 times/week", "Sports", "Regular cardio"),
    ),
    ActivityLevel(
        id="very_active",
        name="Very Active",
        description="Heavy exercise 6-7 days/week",
        multiplier=1.725,
        examples=("Daily workouts", "Physical job", "Training athlete"),
    ),
    ActivityLevel(
        id="extra_active",
        name="Extra Active",
        description="Very heavy physical work/exercise",
        multiplier=1.9,
        examples=("Construction worker", "Professional athlete", "2+ workouts/day"),
    ),
)

_FITNESS_GOALS = (
    FitnessGoal(
        id="lose_weight",
        name="Lose Weight",
        description="Create a caloric deficit for weight loss",
        calorie_adjustment=-0.2,
        protein_ratio=0.30,
        carb_ratio=0.35,
        fat_ratio=0.35,
    ),
    FitnessGoal(
        id="maintain_weight",
        name="Maintain Weight",
        description="Maintain current weight and body composition",
        calorie_adjustment=0.0,
        protein_ratio=0.25,
        carb_ratio=0.45,
        fat_ratio=0.30,
    ),
    FitnessGoal(
        id="gain_weight",
        name="Gain Weight",
        description="Create a caloric surplus for weight gain",
        calorie_adjustment=0.15,
        protein_ratio=0.25,
        carb_ratio=0.50,
        fat_ratio=0.25,
    ),
    FitnessGoal(
        id="build_muscle",
        name="Build Muscle",
        description="Optimize for muscle growth and strength",
        calorie_adjustment=0.10,
        protein_ratio=0.35,
        carb_ratio=0.40,
        fat_ratio=0.25,
    ),
    FitnessGoal(
        id="improve_health",
        name="Improve Health",
        description="Focus on overall health and nutrition",
        calorie_adjustment=0.0,
        protein_ratio=0.20,
        carb_ratio=0.50,
        fat_ratio=0.30,
    ),
)

# Insertion order is the catalog order (least to most active).
ACTIVITY_LEVELS: Mapping[str, ActivityLevel] = MappingProxyType({a.id: a for a in _ACTIVITY_LEVELS})
FITNESS_GOALS: Mapping[str, FitnessGoal] = MappingProxyType({g.id: g for g in _FITNESS_GOALS})

SEDENTARY_MULTIPLIER = ACTIVITY_LEVELS["sedentary"].multiplier
HIGH_ACTIVITY_IDS = frozenset({"very_active", "extra_active"})


def get_activity_level(activity_level_id: str | None) -> Optional[ActivityLevel]:
    return ACTIVITY_LEVELS.get(activity_level_id or "")


def get_fitness_goal(fitness_goal_id: str | None) -> Optional[FitnessGoal]:
    return FITNESS_GOALS.get(fitness_goal_id or "")


def is_high_activity(activity_level_id: str | None) -> bool:
    return activity_level_id in HIGH_ACTIVITY_IDS
