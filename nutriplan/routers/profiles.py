# nutriplan/routers/profiles.py
from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from nutriplan.schemas import HealthProfileIn
from nutriplan.services import health, meal_timing
from nutriplan.services.health import MAX_MEALS_PER_DAY, HealthProfileResult, create_health_profile
from nutriplan.services.shopping import generate_detailed_shopping_list, generate_shopping_recommendations

router = APIRouter()
log = logging.getLogger(__name__)


def _profile_or_400(payload: HealthProfileIn) -> HealthProfileResult:
    result = create_health_profile(payload.to_request())
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)
    return result


@router.post("/health-profile", summary="Metrics, nutrition targets and meal timings for a profile")
def post_health_profile(payload: HealthProfileIn):
    return health.to_dict(_profile_or_400(payload))


@router.post("/meal-timing", summary="Meal, snack, hydration and fasting schedule")
def post_meal_timing(payload: HealthProfileIn):
    profile = payload.to_profile()
    if not 1 <= profile.meals_per_day <= MAX_MEALS_PER_DAY:
        raise HTTPException(status_code=400, detail=f"meals_per_day must be between 1 and {MAX_MEALS_PER_DAY}")
    return meal_timing.to_dict(meal_timing.generate_meal_timing(profile))


@router.post("/shopping", summary="Shopping focus areas and priority items")
def post_shopping(payload: HealthProfileIn):
    result = _profile_or_400(payload)
    recs = generate_shopping_recommendations(result.profile, result.nutrition_targets)
    return {
        **asdict(recs),
        "detailed_list": [asdict(c) for c in generate_detailed_shopping_list(result.nutrition_targets)],
    }


@router.get("/food-timing", summary="General food timing guide by time of day")
def get_food_timing():
    return [asdict(p) for p in meal_timing.food_timing_guide()]


@router.post("/day-plan", summary="Nutrition targets combined with the day's schedule")
def post_day_plan(payload: HealthProfileIn):
    result = _profile_or_400(payload)
    schedule = meal_timing.generate_meal_timing(result.profile)
    log.info(
        "day plan: kcal=%s meals=%d goal=%s",
        result.nutrition_targets.total_calories, len(schedule.meal_times), result.profile.fitness_goal_id,
    )
    return {
        "nutrition_targets": asdict(result.nutrition_targets),
        "meal_timings": [asdict(m) for m in result.meal_timings],
        "schedule": meal_timing.to_dict(schedule),
        "shopping": asdict(generate_shopping_recommendations(result.profile, result.nutrition_targets)),
    }
