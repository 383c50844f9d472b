from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from nutriplan.main import app
from nutriplan.services.health import HealthProfile, ProfileRequest


@pytest.fixture
def make_profile():
    """HealthProfile factory with sensible defaults; override any field by keyword."""
    def _mk(**overrides) -> HealthProfile:
        base = dict(
            height_cm=175.0,
            weight_kg=70.0,
            age=30,
            sex="male",
            activity_level_id="moderately_active",
            fitness_goal_id="maintain_weight",
            meals_per_day=3,
            wake_time="07:00",
            bed_time="23:00",
        )
        base.update(overrides)
        return HealthProfile(**base)
    return _mk


@pytest.fixture
def make_request():
    def _mk(**overrides) -> ProfileRequest:
        base = dict(
            height_cm=175.0,
            weight_kg=70.0,
            age=30,
            sex="male",
            activity_level_id="moderately_active",
            fitness_goal_id="maintain_weight",
        )
        base.update(overrides)
        return ProfileRequest(**base)
    return _mk


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def payload():
    return {
        "height_cm": 175,
        "weight_kg": 70,
        "age": 30,
        "sex": "male",
        "activity_level_id": "moderately_active",
        "fitness_goal_id": "lose_weight",
        "dietary_restrictions": [],
        "health_conditions": [],
        "meals_per_day": 3,
        "wake_time": "07:00",
        "bed_time": "23:00",
    }
