# nutriplan/routers/catalog.py
from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter

from nutriplan.services.catalog import ACTIVITY_LEVELS, FITNESS_GOALS

router = APIRouter()


@router.get("/activity-levels", summary="Activity levels and TDEE multipliers")
def list_activity_levels():
    return [asdict(a) for a in ACTIVITY_LEVELS.values()]


@router.get("/fitness-goals", summary="Fitness goals, calorie adjustments and macro ratios")
def list_fitness_goals():
    return [asdict(g) for g in FITNESS_GOALS.values()]
