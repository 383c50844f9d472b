import pytest

from nutriplan.services.catalog import FITNESS_GOALS
from nutriplan.services.clock import InvalidClockTime
from nutriplan.services.meal_timing import (
    FOOD_CATEGORIES,
    food_timing_guide,
    generate_meal_timing,
    to_dict,
)


# ---- Meals ----

def test_single_meal_at_midpoint(make_profile):
    rec = generate_meal_timing(make_profile(meals_per_day=1))
    assert rec.meal_times == ["15:00"]
    assert rec.snack_times == []


def test_two_meals(make_profile):
    rec = generate_meal_timing(make_profile(meals_per_day=2))
    # wake + 1h, then 3/4 through 960 active minutes
    assert rec.meal_times == ["08:00", "19:00"]
    assert rec.snack_times == ["13:30"]


def test_three_meals_centered_in_equal_slices(make_profile):
    rec = generate_meal_timing(make_profile(meals_per_day=3))
    # 320-minute slices: wake+160, wake+480, wake+800
    assert rec.meal_times == ["09:40", "15:00", "20:20"]


def test_overnight_sleep(make_profile):
    rec = generate_meal_timing(make_profile(meals_per_day=1, wake_time="07:00", bed_time="01:00"))
    # 1080 active minutes, midpoint 540 after wake
    assert rec.meal_times == ["16:00"]


# ---- Snacks ----

def test_one_snack_for_regular_activity(make_profile):
    rec = generate_meal_timing(make_profile(meals_per_day=3))
    assert rec.snack_times == ["12:20"]


@pytest.mark.parametrize("level", ["very_active", "extra_active"])
def test_two_snacks_for_high_activity(make_profile, level):
    rec = generate_meal_timing(make_profile(meals_per_day=3, activity_level_id=level))
    assert rec.snack_times == ["12:20", "17:40"]


def test_no_snacks_when_gaps_are_short(make_profile):
    rec = generate_meal_timing(make_profile(meals_per_day=6, activity_level_id="extra_active"))
    assert len(rec.meal_times) == 6
    assert rec.snack_times == []


# ---- Category timing ----

def test_category_timing(make_profile):
    ct = generate_meal_timing(make_profile()).category_timing
    assert tuple(ct) == FOOD_CATEGORIES
    assert ct["carbs"].best_times == ["07:30", "15:00"]
    assert ct["proteins"].best_times == ["08:00", "20:00"]
    assert ct["healthy_fats"].best_times == ["08:30", "19:00"]
    assert ct["vegetables"].best_times == ["08:00", "16:36"]
    assert ct["fruits"].best_times == ["07:30", "13:24"]
    assert all(c.reasoning for c in ct.values())


def test_category_timing_clamped_to_waking_hours(make_profile):
    ct = generate_meal_timing(make_profile(wake_time="07:00", bed_time="10:00")).category_timing
    # sleep - 240 would land before waking
    assert ct["healthy_fats"].best_times == ["08:30", "07:00"]
    assert ct["proteins"].best_times == ["08:00", "07:00"]


def test_category_timing_overnight(make_profile):
    ct = generate_meal_timing(make_profile(wake_time="07:00", bed_time="01:00")).category_timing
    assert ct["proteins"].best_times == ["08:00", "22:00"]


# ---- Hydration ----

def test_hydration_schedule(make_profile):
    schedule = generate_meal_timing(make_profile()).hydration_schedule
    assert [h.time for h in schedule] == ["07:00", "09:30", "12:00", "14:30", "17:00", "19:30", "21:00"]
    assert schedule[0].amount == "16-20 oz"
    assert {h.amount for h in schedule[1:-1]} == {"8-12 oz"}
    assert schedule[-1].amount == "6-8 oz"


def test_hydration_high_activity_amounts(make_profile):
    schedule = generate_meal_timing(make_profile(activity_level_id="very_active")).hydration_schedule
    assert {h.amount for h in schedule[1:-1]} == {"12-16 oz"}


def test_hydration_short_day_has_no_pre_bed_entry(make_profile):
    schedule = generate_meal_timing(make_profile(wake_time="07:00", bed_time="12:00")).hydration_schedule
    assert [h.time for h in schedule] == ["07:00", "09:30"]


def test_hydration_overnight(make_profile):
    schedule = generate_meal_timing(make_profile(wake_time="07:00", bed_time="01:00")).hydration_schedule
    assert [h.time for h in schedule] == [
        "07:00", "09:30", "12:00", "14:30", "17:00", "19:30", "22:00", "23:00",
    ]


# ---- Tips ----

def test_base_tips(make_profile):
    assert len(generate_meal_timing(make_profile()).metabolism_tips) == 3


def test_tips_for_high_activity_weight_loss(make_profile):
    tips = generate_meal_timing(
        make_profile(activity_level_id="extra_active", fitness_goal_id="lose_weight")
    ).metabolism_tips
    assert len(tips) == 7
    assert tips[3] == "Consider eating small amounts every 2-3 hours to fuel high activity"
    assert tips[-1] == "Stop eating 3 hours before bedtime to optimize fat burning during sleep"


def test_tips_for_muscle_building(make_profile):
    tips = generate_meal_timing(make_profile(fitness_goal_id="build_muscle")).metabolism_tips
    assert tips[3:] == [
        "Eat protein within 2 hours after strength training",
        "Don't let more than 4 hours pass without eating to support muscle growth",
    ]


# ---- Fasting window ----

@pytest.mark.parametrize("goal_id", [g for g in FITNESS_GOALS if g != "lose_weight"])
def test_no_fasting_window_unless_losing_weight(make_profile, goal_id):
    assert generate_meal_timing(make_profile(fitness_goal_id=goal_id)).fasting_window is None


def test_fasting_window_recommended_for_long_days(make_profile):
    fw = generate_meal_timing(make_profile(fitness_goal_id="lose_weight")).fasting_window
    assert fw.recommended is True
    # eating 10:00-18:00, fast 18:00 -> 10:00
    assert (fw.start, fw.end, fw.duration_hours) == ("18:00", "10:00", 16)


def test_fasting_window_not_recommended_for_short_days(make_profile):
    fw = generate_meal_timing(
        make_profile(fitness_goal_id="lose_weight", wake_time="07:00", bed_time="20:00")
    ).fasting_window
    assert fw.recommended is False
    assert (fw.start, fw.end, fw.duration_hours) == ("18:00", "10:00", 16)


# ---- Misc ----

def test_malformed_clock_raises(make_profile):
    with pytest.raises(InvalidClockTime):
        generate_meal_timing(make_profile(wake_time="seven"))


def test_deterministic(make_profile):
    p = make_profile(fitness_goal_id="lose_weight", activity_level_id="very_active", meals_per_day=5)
    assert to_dict(generate_meal_timing(p)) == to_dict(generate_meal_timing(p))


def test_food_timing_guide():
    guide = food_timing_guide()
    assert [g.time_of_day for g in guide] == ["06:00-10:00", "10:00-14:00", "14:00-18:00", "18:00-22:00"]
    assert guide[0].period == "morning"
    assert "caffeine" in guide[-1].avoid
