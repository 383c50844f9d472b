# nutriplan/services/meal_timing.py
"""
Day-shaped eating schedule for a HealthProfile.

Wake/bed strings are parsed to minutes since midnight and sleep is unrolled to
`wake + active_minutes`, so a bed time past midnight keeps every offset
monotonic. Clock times are clamped into [wake, sleep]; only the pre-bed
hydration entry and the fasting window are anchored outside that rule.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from nutriplan.services.catalog import is_high_activity
from nutriplan.services.clock import active_minutes, clamp, format_clock, parse_clock
from nutriplan.services.health import HealthProfile

log = logging.getLogger(__name__)

SNACK_GAP_MINUTES = 240
HYDRATION_INTERVAL_MINUTES = 150
PRE_BED_HYDRATION_MINUTES = 120
PRE_BED_MIN_ACTIVE_MINUTES = 360
FASTING_HOURS = 16
EATING_WINDOW_HOURS = 8
EATING_START_OFFSET_MINUTES = 180
FASTING_RECOMMENDED_MIN_ACTIVE = 14 * 60

FOOD_CATEGORIES = ("carbs", "proteins", "healthy_fats", "vegetables", "fruits")


@dataclass
class CategoryTiming:
    best_times: List[str]
    reasoning: str


@dataclass
class HydrationEntry:
    time: str
    amount: str
    note: str


@dataclass
class FastingWindow:
    start: str  # fast begins (eating window closes)
    end: str  # fast ends (eating window opens)
    duration_hours: int
    recommended: bool


@dataclass
class MealTimingRecommendation:
    meal_times: List[str]
    snack_times: List[str]
    category_timing: Dict[str, CategoryTiming]
    hydration_schedule: List[HydrationEntry]
    metabolism_tips: List[str]
    fasting_window: Optional[FastingWindow] = None


@dataclass
class FoodTimingPeriod:
    time_of_day: str
    period: str  # "morning" | "afternoon" | "evening" | "night"
    highly_recommended: List[str]
    recommended: List[str]
    avoid: List[str]
    reasoning: str
    metabolic_benefit: str


# ---- Meals & snacks ----

def _meal_minutes(wake: int, active: int, meal_count: int) -> List[int]:
    if meal_count <= 0:
        return []
    if meal_count == 1:
        return [wake + active // 2]
    if meal_count == 2:
        return [wake + 60, wake + int(active * 0.75)]

    # centered within equal slices
    interval = active // meal_count
    return [wake + (i + 1) * interval - interval // 2 for i in range(meal_count)]


def _snack_minutes(meals: List[int], activity_level_id: str) -> List[int]:
    if len(meals) <= 1:
        return []
    needed = 2 if is_high_activity(activity_level_id) else 1
    snacks: List[int] = []
    for a, b in zip(meals, meals[1:]):
        gap = b - a
        if gap > SNACK_GAP_MINUTES:
            snacks.append(a + gap // 2)
    # first qualifying gaps in day order, not the largest
    return snacks[:needed]


# ---- Category timing ----

def _category_timing(wake: int, sleep: int, active: int) -> Dict[str, CategoryTiming]:
    def at(minutes: int) -> str:
        return format_clock(clamp(minutes, wake, sleep))

    return {
        "carbs": CategoryTiming(
            best_times=[at(wake + 30), at(wake + active // 2)],
            reasoning=(
                "Complex carbohydrates provide sustained energy and are best consumed in the morning "
                "and midday when you need fuel for activities."
            ),
        ),
        "proteins": CategoryTiming(
            best_times=[at(wake + 60), at(sleep - 180)],
            reasoning=(
                "Protein supports muscle repair and growth. Consume after morning activities and "
                "several hours before bed for optimal digestion."
            ),
        ),
        "healthy_fats": CategoryTiming(
            best_times=[at(wake + 90), at(sleep - 240)],
            reasoning=(
                "Healthy fats promote satiety and nutrient absorption. Best consumed with meals and "
                "avoided close to bedtime."
            ),
        ),
        "vegetables": CategoryTiming(
            best_times=[at(wake + 60), at(wake + int(active * 0.6))],
            reasoning=(
                "Vegetables provide essential vitamins and fiber. Consume throughout the day, with raw "
                "vegetables better earlier for easier digestion."
            ),
        ),
        "fruits": CategoryTiming(
            best_times=[at(wake + 30), at(wake + int(active * 0.4))],
            reasoning=(
                "Fruits provide quick energy and vitamins. Best consumed in the morning or as afternoon "
                "snacks when you need natural sugar."
            ),
        ),
    }


# ---- Hydration ----

def _hydration_schedule(wake: int, sleep: int, active: int, activity_level_id: str) -> List[HydrationEntry]:
    schedule = [
        HydrationEntry(
            time=format_clock(wake),
            amount="16-20 oz",
            note="Rehydrate after sleep to kickstart metabolism",
        )
    ]

    amount = "12-16 oz" if is_high_activity(activity_level_id) else "8-12 oz"
    t = wake + HYDRATION_INTERVAL_MINUTES
    while t < sleep - PRE_BED_HYDRATION_MINUTES:
        schedule.append(HydrationEntry(time=format_clock(t), amount=amount, note="Maintain consistent hydration"))
        t += HYDRATION_INTERVAL_MINUTES

    if active > PRE_BED_MIN_ACTIVE_MINUTES:
        schedule.append(
            HydrationEntry(
                time=format_clock(sleep - PRE_BED_HYDRATION_MINUTES),
                amount="6-8 oz",
                note="Light hydration before bed to avoid sleep disruption",
            )
        )
    return schedule


# ---- Tips & fasting ----

def _metabolism_tips(activity_level_id: str, fitness_goal_id: str) -> List[str]:
    tips = [
        "Eat within 1 hour of waking to jumpstart metabolism",
        "Don't skip meals - consistent eating maintains metabolic rate",
        "Include protein with each meal to support muscle maintenance",
    ]
    if is_high_activity(activity_level_id):
        tips += [
            "Consider eating small amounts every 2-3 hours to fuel high activity",
            "Time carbohydrates around workouts for optimal performance",
        ]
    if fitness_goal_id == "lose_weight":
        tips += [
            "Create a consistent eating schedule to regulate hunger hormones",
            "Stop eating 3 hours before bedtime to optimize fat burning during sleep",
        ]
    elif fitness_goal_id == "build_muscle":
        tips += [
            "Eat protein within 2 hours after strength training",
            "Don't let more than 4 hours pass without eating to support muscle growth",
        ]
    return tips


def _fasting_window(wake: int, active: int, fitness_goal_id: str) -> Optional[FastingWindow]:
    if fitness_goal_id != "lose_weight":
        return None
    eating_start = wake + EATING_START_OFFSET_MINUTES
    eating_end = eating_start + EATING_WINDOW_HOURS * 60
    return FastingWindow(
        start=format_clock(eating_end),
        end=format_clock(eating_start),
        duration_hours=FASTING_HOURS,
        recommended=active >= FASTING_RECOMMENDED_MIN_ACTIVE,
    )


# ---- Public API ----

def generate_meal_timing(profile: HealthProfile) -> MealTimingRecommendation:
    """
    Meal and snack clock times, per-category best times, hydration checkpoints,
    metabolism tips and (for weight loss only) a 16:8 fasting window.

    Raises InvalidClockTime if wake/bed time is not HH:MM.
    """
    wake = parse_clock(profile.wake_time)
    active = active_minutes(wake, parse_clock(profile.bed_time))
    sleep = wake + active

    meals = [clamp(m, wake, sleep) for m in _meal_minutes(wake, active, profile.meals_per_day)]
    snacks = _snack_minutes(meals, profile.activity_level_id)

    log.debug(
        "meal timing: wake=%s active=%d meals=%d snacks=%d",
        profile.wake_time, active, len(meals), len(snacks),
    )

    return MealTimingRecommendation(
        meal_times=[format_clock(m) for m in meals],
        snack_times=[format_clock(s) for s in snacks],
        category_timing=_category_timing(wake, sleep, active),
        hydration_schedule=_hydration_schedule(wake, sleep, active, profile.activity_level_id),
        metabolism_tips=_metabolism_tips(profile.activity_level_id, profile.fitness_goal_id),
        fasting_window=_fasting_window(wake, active, profile.fitness_goal_id),
    )


def food_timing_guide() -> List[FoodTimingPeriod]:
    """What to favour and avoid across four fixed windows of the day."""
    return [
        FoodTimingPeriod(
            time_of_day="06:00-10:00",
            period="morning",
            highly_recommended=["complex carbs", "protein", "fruits", "coffee/tea"],
            recommended=["healthy fats", "whole grains", "dairy"],
            avoid=["heavy fats", "processed foods", "alcohol"],
            reasoning="Morning cortisol is high, metabolism is active",
            metabolic_benefit="Optimal carb utilization and energy production",
        ),
        FoodTimingPeriod(
            time_of_day="10:00-14:00",
            period="afternoon",
            highly_recommended=["lean protein", "vegetables", "complex carbs"],
            recommended=["healthy fats", "legumes", "whole grains"],
            avoid=["simple sugars", "heavy desserts"],
            reasoning="Peak metabolic activity period",
            metabolic_benefit="Best time for largest meal and complex nutrients",
        ),
        FoodTimingPeriod(
            time_of_day="14:00-18:00",
            period="afternoon",
            highly_recommended=["vegetables", "lean protein", "fruits"],
            recommended=["nuts", "seeds", "light carbs"],
            avoid=["heavy meals", "excessive fats"],
            reasoning="Metabolism begins to slow, prepare for evening",
            metabolic_benefit="Maintain energy without overwhelming digestion",
        ),
        FoodTimingPeriod(
            time_of_day="18:00-22:00",
            period="evening",
            highly_recommended=["lean protein", "vegetables", "herbal tea"],
            recommended=["light carbs", "healthy fats in moderation"],
            avoid=["heavy meals", "caffeine", "alcohol", "excess carbs"],
            reasoning="Prepare body for rest and recovery",
            metabolic_benefit="Support muscle recovery without disrupting sleep",
        ),
    ]


def to_dict(rec: MealTimingRecommendation) -> Dict:
    return asdict(rec)
