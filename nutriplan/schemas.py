# nutriplan/schemas.py
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, field_validator

from nutriplan.config import settings
from nutriplan.services.clock import InvalidClockTime, parse_clock
from nutriplan.services.health import HealthProfile, ProfileRequest


class HealthProfileIn(BaseModel):
    height_cm: float
    weight_kg: float
    age: int
    sex: Literal["male", "female", "other"] = "other"
    activity_level_id: str
    fitness_goal_id: str
    dietary_restrictions: list[str] = []
    health_conditions: list[str] = []
    meals_per_day: int | None = None
    wake_time: str | None = None
    bed_time: str | None = None

    @field_validator("sex", mode="before")
    @classmethod
    def _normalize_sex(cls, v: Any) -> Any:
        if v is None:
            return "other"
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # HH:MM, 24-hour; anything else is a 422
    @field_validator("wake_time", "bed_time", mode="before")
    @classmethod
    def _check_clock(cls, v: Any) -> Any:
        if v in (None, ""):
            return None
        try:
            parse_clock(v)
        except InvalidClockTime as e:
            raise ValueError(str(e))
        return v.strip()

    def to_request(self) -> ProfileRequest:
        return ProfileRequest(
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            age=self.age,
            sex=self.sex,
            activity_level_id=self.activity_level_id,
            fitness_goal_id=self.fitness_goal_id,
            dietary_restrictions=list(self.dietary_restrictions),
            health_conditions=list(self.health_conditions),
            meals_per_day=self.meals_per_day if self.meals_per_day is not None else settings.DEFAULT_MEALS_PER_DAY,
            wake_time=self.wake_time or settings.DEFAULT_WAKE_TIME,
            bed_time=self.bed_time or settings.DEFAULT_BED_TIME,
        )

    def to_profile(self) -> HealthProfile:
        """Unvalidated profile for the scheduler, which only needs ids and times."""
        req = self.to_request()
        return HealthProfile(
            height_cm=req.height_cm,
            weight_kg=req.weight_kg,
            age=req.age,
            sex=req.sex,
            activity_level_id=req.activity_level_id,
            fitness_goal_id=req.fitness_goal_id,
            dietary_restrictions=tuple(req.dietary_restrictions),
            health_conditions=tuple(req.health_conditions),
            meals_per_day=req.meals_per_day,
            wake_time=req.wake_time,
            bed_time=req.bed_time,
        )
