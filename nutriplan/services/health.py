# nutriplan/services/health.py
"""
Health metrics and nutrition targets for NutriPlan.

- BMR: Mifflin–St Jeor (+5 male, -161 female, -78 otherwise, the mean offset)
- TDEE = BMR * activity multiplier (unknown level -> sedentary 1.2)
- Target kcal = round(TDEE * (1 + goal.calorie_adjustment))
- Macros split target kcal by the goal's ratios; 4/4/9 kcal per gram
- Water: 35 ml/kg, plus (multiplier - 1.2) * 0.5 L above "moderately active"

Every function here is a pure function of its arguments and the static
catalogs. Sub-calculations never raise on unknown catalog ids; they log a
warning and fall back. `create_health_profile` is the validating entry point
and reports problems through `success=False` instead of raising.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field, replace
from datetime import UTC, datetime
from typing import Dict, List, Optional, Tuple

from nutriplan.services.catalog import (
    SEDENTARY_MULTIPLIER,
    get_activity_level,
    get_fitness_goal,
)
from nutriplan.services.clock import (
    InvalidClockTime,
    MINUTES_PER_DAY,
    active_minutes,
    clamp,
    format_clock,
    parse_clock,
)

log = logging.getLogger(__name__)

DEFAULT_MEALS_PER_DAY = 3
DEFAULT_WAKE_TIME = "07:00"
DEFAULT_BED_TIME = "22:00"

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

# Balanced split used when the fitness goal cannot be resolved.
BALANCED_RATIOS = (0.25, 0.45, 0.30)

# Plausibility bounds for request validation (exclusive lower bound of 0).
MAX_HEIGHT_CM = 300
MAX_WEIGHT_KG = 650
MAX_AGE_YEARS = 130
MAX_MEALS_PER_DAY = 10

INVALID_CATALOG_MESSAGE = "Invalid activity level or fitness goal"
NON_POSITIVE_ENERGY_MESSAGE = "Height, weight and age give a non-positive calorie target"


class ProfileValidationError(ValueError):
    """A request that cannot be turned into a HealthProfile."""


# ---- Data models ----

@dataclass(frozen=True)
class HealthProfile:
    height_cm: float
    weight_kg: float
    age: int
    sex: str  # "male" | "female" | "other"
    activity_level_id: str
    fitness_goal_id: str
    dietary_restrictions: Tuple[str, ...] = ()
    health_conditions: Tuple[str, ...] = ()
    meals_per_day: int = DEFAULT_MEALS_PER_DAY
    wake_time: str = DEFAULT_WAKE_TIME
    bed_time: str = DEFAULT_BED_TIME


@dataclass(frozen=True)
class ProfileRequest:
    height_cm: float
    weight_kg: float
    age: int
    sex: str
    activity_level_id: str
    fitness_goal_id: str
    dietary_restrictions: Optional[List[str]] = None
    health_conditions: Optional[List[str]] = None
    meals_per_day: Optional[int] = None
    wake_time: Optional[str] = None
    bed_time: Optional[str] = None


@dataclass
class MacroTarget:
    grams: int
    calories: float
    percentage: int


@dataclass
class NutritionTargets:
    total_calories: int
    protein: MacroTarget
    carbs: MacroTarget
    fat: MacroTarget
    fiber: int
    water: float  # liters


@dataclass
class IdealWeight:
    min: float
    max: float


@dataclass
class HealthMetrics:
    bmi: float
    bmi_category: str  # "underweight" | "normal" | "overweight" | "obese"
    bmr: float
    tdee: float
    water_need: float
    ideal_weight: IdealWeight
    health_score: int = 0
    recommendations: List[str] = field(default_factory=list)


@dataclass
class MealTiming:
    meal_type: str
    recommended_time: str
    time_window: str
    calorie_percentage: int
    macro_focus: List[str]
    food_categories: List[str]
    reasoning: str


@dataclass
class HealthProfileResult:
    success: bool
    profile: Optional[HealthProfile] = None
    metrics: Optional[HealthMetrics] = None
    nutrition_targets: Optional[NutritionTargets] = None
    meal_timings: Optional[List[MealTiming]] = None
    message: Optional[str] = None
    updated_at: Optional[str] = None


# ---- Helpers ----

def round_half_up(value: float, ndigits: int = 0) -> float:
    # round() in Python is banker's rounding; targets use half-up
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


def round_int(value: float) -> int:
    return int(round_half_up(value))


def _activity_multiplier(activity_level_id: str) -> float:
    level = get_activity_level(activity_level_id)
    return level.multiplier if level else SEDENTARY_MULTIPLIER


# ---- Energy ----

def calculate_bmr(weight_kg: float, height_cm: float, age: int, sex: str) -> float:
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    s = (sex or "").lower()
    if s == "male":
        return base + 5
    if s == "female":
        return base - 161
    # mean of the male/female offsets
    return base - 78


def calculate_tdee(bmr: float, activity_level_id: str) -> float:
    level = get_activity_level(activity_level_id)
    if level is None:
        log.warning("Activity level %r not found, using sedentary", activity_level_id)
        return bmr * SEDENTARY_MULTIPLIER
    return bmr * level.multiplier


def calculate_target_calories(tdee: float, fitness_goal_id: str) -> int:
    goal = get_fitness_goal(fitness_goal_id)
    if goal is None:
        log.warning("Fitness goal %r not found, using maintenance", fitness_goal_id)
        return round_int(tdee)
    return round_int(tdee * (1 + goal.calorie_adjustment))


# ---- Body ----

def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "underweight"
    if bmi < 25:
        return "normal"
    if bmi < 30:
        return "overweight"
    return "obese"


def calculate_bmi(weight_kg: float, height_cm: float) -> Tuple[float, str]:
    """Returns (bmi rounded to 0.1, category of the unrounded value)."""
    height_m = height_cm / 100
    bmi = weight_kg / (height_m * height_m)
    return round_half_up(bmi, 1), bmi_category(bmi)


def calculate_ideal_weight(height_cm: float) -> IdealWeight:
    height_m = height_cm / 100
    return IdealWeight(
        min=round_half_up(18.5 * height_m * height_m, 1),
        max=round_half_up(24.9 * height_m * height_m, 1),
    )


def calculate_water_needs(weight_kg: float, activity_level_id: str) -> float:
    base_l = weight_kg * 35 / 1000
    multiplier = _activity_multiplier(activity_level_id)
    extra_l = (multiplier - 1.2) * 0.5 if multiplier > 1.55 else 0
    return round_half_up(base_l + extra_l, 1)


# ---- Macros ----

def _macro(kcal: float, ratio: float, kcal_per_g: int) -> MacroTarget:
    calories = kcal * ratio
    return MacroTarget(
        grams=round_int(calories / kcal_per_g),
        calories=calories,
        percentage=round_int(ratio * 100),
    )


def calculate_nutrition_targets(target_calories: int, fitness_goal_id: str) -> NutritionTargets:
    goal = get_fitness_goal(fitness_goal_id)
    if goal is None:
        log.warning("Fitness goal %r not found, using balanced macros", fitness_goal_id)
        p, c, f = BALANCED_RATIOS
    else:
        p, c, f = goal.protein_ratio, goal.carb_ratio, goal.fat_ratio

    return NutritionTargets(
        total_calories=target_calories,
        protein=_macro(target_calories, p, KCAL_PER_G_PROTEIN),
        carbs=_macro(target_calories, c, KCAL_PER_G_CARBS),
        fat=_macro(target_calories, f, KCAL_PER_G_FAT),
        fiber=round_int(target_calories / 100),  # ~1 g per 100 kcal
        water=2.5,  # placeholder; create_health_profile sets water_need
    )


# ---- Score & advice ----

def calculate_health_score(profile: HealthProfile, metrics: HealthMetrics) -> int:
    score = 100

    # BMI
    if metrics.bmi_category == "overweight":
        score -= 15
    elif metrics.bmi_category == "underweight":
        score -= 20
    elif metrics.bmi_category != "normal":
        score -= 30

    # Activity
    multiplier = _activity_multiplier(profile.activity_level_id)
    if multiplier >= 1.55:
        pass
    elif multiplier >= 1.375:
        score -= 5
    else:
        score -= 15

    # Conditions, capped
    score -= min(len(profile.health_conditions) * 10, 20)

    # Age
    if profile.age >= 50:
        score -= 10
    elif profile.age >= 30:
        score -= 5

    if profile.fitness_goal_id == "improve_health":
        score += 5

    return max(0, min(100, score))


def generate_health_recommendations(profile: HealthProfile, metrics: HealthMetrics) -> List[str]:
    recs: List[str] = []

    if metrics.bmi_category in ("overweight", "obese"):
        recs.append("Consider a moderate caloric deficit for healthy weight loss")
        recs.append("Increase physical activity gradually")
    elif metrics.bmi_category == "underweight":
        recs.append("Focus on nutrient-dense, calorie-rich foods")
        recs.append("Consider strength training to build muscle mass")

    level = get_activity_level(profile.activity_level_id)
    if level is not None and level.multiplier < 1.375:
        recs.append("Aim for at least 150 minutes of moderate exercise per week")
        recs.append("Take regular breaks to move throughout the day")

    recs.append(f"Drink at least {metrics.water_need}L of water daily")

    awake = active_minutes(parse_clock(profile.wake_time), parse_clock(profile.bed_time))
    if MINUTES_PER_DAY - awake < 7 * 60:
        recs.append("Aim for 7-9 hours of quality sleep each night")

    recs.append("Eat your largest meal when most active (typically lunch)")
    recs.append("Stop eating 2-3 hours before bedtime for better sleep")
    return recs


# ---- Per-meal timings ----

def _window(wake: int, sleep: int, start: int, end: int) -> str:
    return f"{format_clock(clamp(start, wake, sleep))}-{format_clock(clamp(end, wake, sleep))}"


def generate_meal_timings(profile: HealthProfile) -> List[MealTiming]:
    """
    Breakfast / lunch / dinner (+ afternoon snack above 3 meals), anchored to
    wake and bed time. Fewer than 3 meals yields no per-meal guidance.
    """
    if profile.meals_per_day < 3:
        return []

    wake = parse_clock(profile.wake_time)
    sleep = wake + active_minutes(wake, parse_clock(profile.bed_time))

    def at(minutes: int) -> str:
        return format_clock(clamp(minutes, wake, sleep))

    timings = [
        MealTiming(
            meal_type="breakfast",
            recommended_time=at(wake + 60),
            time_window=_window(wake, sleep, wake + 60, wake + 150),
            calorie_percentage=25,
            macro_focus=["carbs", "protein"],
            food_categories=["whole grains", "fruits", "protein", "dairy"],
            reasoning="Start the day with energy-providing carbs and muscle-supporting protein",
        ),
        MealTiming(
            meal_type="lunch",
            recommended_time=at(wake + 330),
            time_window=_window(wake, sleep, wake + 300, wake + 420),
            calorie_percentage=35,
            macro_focus=["protein", "carbs", "fats"],
            food_categories=["lean protein", "vegetables", "complex carbs", "healthy fats"],
            reasoning="Balanced meal to sustain energy through the afternoon",
        ),
        MealTiming(
            meal_type="dinner",
            recommended_time=at(sleep - 210),
            time_window=_window(wake, sleep, sleep - 240, sleep - 120),
            calorie_percentage=30,
            macro_focus=["protein", "vegetables"],
            food_categories=["lean protein", "vegetables", "limited carbs"],
            reasoning="Lighter meal to aid digestion and sleep quality",
        ),
    ]

    if profile.meals_per_day > 3:
        timings.append(
            MealTiming(
                meal_type="afternoon_snack",
                recommended_time=at(wake + 510),
                time_window=_window(wake, sleep, wake + 480, wake + 540),
                calorie_percentage=10,
                macro_focus=["protein"],
                food_categories=["nuts", "fruits", "yogurt"],
                reasoning="Small snack to maintain energy between lunch and dinner",
            )
        )
    return timings


# ---- Orchestration ----

def _check_range(name: str, value: float, upper: float) -> None:
    if value is None or not math.isfinite(value) or value <= 0 or value > upper:
        raise ProfileValidationError(f"{name} must be greater than 0 and at most {upper}")


def validate_request(request: ProfileRequest) -> HealthProfile:
    """
    Resolve defaults and reject anything the formulas cannot handle.
    Raises ProfileValidationError.
    """
    if get_activity_level(request.activity_level_id) is None or get_fitness_goal(request.fitness_goal_id) is None:
        raise ProfileValidationError(INVALID_CATALOG_MESSAGE)

    _check_range("height_cm", request.height_cm, MAX_HEIGHT_CM)
    _check_range("weight_kg", request.weight_kg, MAX_WEIGHT_KG)
    _check_range("age", request.age, MAX_AGE_YEARS)

    meals = request.meals_per_day if request.meals_per_day is not None else DEFAULT_MEALS_PER_DAY
    if not 1 <= meals <= MAX_MEALS_PER_DAY:
        raise ProfileValidationError(f"meals_per_day must be between 1 and {MAX_MEALS_PER_DAY}")

    wake_time = request.wake_time or DEFAULT_WAKE_TIME
    bed_time = request.bed_time or DEFAULT_BED_TIME
    try:
        parse_clock(wake_time)
        parse_clock(bed_time)
    except InvalidClockTime as e:
        raise ProfileValidationError(str(e)) from e

    sex = (request.sex or "other").lower()
    bmr = calculate_bmr(request.weight_kg, request.height_cm, request.age, sex)
    target = calculate_target_calories(
        calculate_tdee(bmr, request.activity_level_id), request.fitness_goal_id
    )
    if bmr <= 0 or target <= 0:
        raise ProfileValidationError(NON_POSITIVE_ENERGY_MESSAGE)

    return HealthProfile(
        height_cm=float(request.height_cm),
        weight_kg=float(request.weight_kg),
        age=int(request.age),
        sex=sex,
        activity_level_id=request.activity_level_id,
        fitness_goal_id=request.fitness_goal_id,
        dietary_restrictions=tuple(request.dietary_restrictions or ()),
        health_conditions=tuple(request.health_conditions or ()),
        meals_per_day=int(meals),
        wake_time=wake_time,
        bed_time=bed_time,
    )


def create_health_profile(request: ProfileRequest, *, updated_at: Optional[datetime] = None) -> HealthProfileResult:
    """
    Validate the request and compute metrics, nutrition targets and meal
    timings in one pass. Never raises for bad input: check `success`.

    `updated_at` is stamped on the wrapper only; metrics and targets are a
    pure function of the request.
    """
    try:
        profile = validate_request(request)
    except ProfileValidationError as e:
        log.info("Rejected health profile: %s", e)
        return HealthProfileResult(success=False, message=str(e))

    bmr = calculate_bmr(profile.weight_kg, profile.height_cm, profile.age, profile.sex)
    tdee = calculate_tdee(bmr, profile.activity_level_id)
    target_calories = calculate_target_calories(tdee, profile.fitness_goal_id)
    bmi, category = calculate_bmi(profile.weight_kg, profile.height_cm)
    ideal_weight = calculate_ideal_weight(profile.height_cm)
    water_need = calculate_water_needs(profile.weight_kg, profile.activity_level_id)

    nutrition_targets = calculate_nutrition_targets(target_calories, profile.fitness_goal_id)
    nutrition_targets.water = water_need

    metrics = HealthMetrics(
        bmi=bmi,
        bmi_category=category,
        bmr=bmr,
        tdee=tdee,
        water_need=water_need,
        ideal_weight=ideal_weight,
    )
    metrics = replace(metrics, health_score=calculate_health_score(profile, metrics))
    metrics.recommendations = generate_health_recommendations(profile, metrics)

    stamp = updated_at or datetime.now(UTC)
    return HealthProfileResult(
        success=True,
        profile=profile,
        metrics=metrics,
        nutrition_targets=nutrition_targets,
        meal_timings=generate_meal_timings(profile),
        message="Health profile created successfully",
        updated_at=stamp.isoformat(),
    )


def to_dict(result: HealthProfileResult) -> Dict:
    out = asdict(result)
    if result.profile is not None:
        out["profile"]["dietary_restrictions"] = list(result.profile.dietary_restrictions)
        out["profile"]["health_conditions"] = list(result.profile.health_conditions)
        out["profile"]["target_calories"] = result.nutrition_targets.total_calories
    return out
