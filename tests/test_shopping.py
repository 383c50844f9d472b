from nutriplan.services.health import calculate_nutrition_targets
from nutriplan.services.shopping import generate_detailed_shopping_list, generate_shopping_recommendations


def _items(recs):
    return [p.item for p in recs.priority_items]


def test_focus_areas_follow_targets(make_profile):
    targets = calculate_nutrition_targets(2000, "lose_weight")
    recs = generate_shopping_recommendations(make_profile(fitness_goal_id="lose_weight"), targets)
    assert [f.category for f in recs.focus_areas] == [
        "Protein Sources", "Complex Carbohydrates", "Healthy Fats", "Fiber & Micronutrients",
    ]
    assert [f.target_percentage for f in recs.focus_areas] == [30, 35, 35, 5]
    assert "150g of protein" in recs.focus_areas[0].reasoning
    assert "78g of healthy fats" in recs.focus_areas[2].reasoning
    assert "20g of fiber" in recs.focus_areas[3].reasoning


def test_default_priority_items(make_profile):
    targets = calculate_nutrition_targets(2000, "maintain_weight")
    recs = generate_shopping_recommendations(make_profile(), targets)
    assert _items(recs) == [
        "Lean proteins (chicken breast, fish, eggs)",
        "Whole grains and starchy vegetables",
        "Omega-3 rich foods (salmon, walnuts, flax seeds)",
    ]


def test_priority_items_vegan_weight_loss_high_activity(make_profile):
    profile = make_profile(
        dietary_restrictions=("vegan",), fitness_goal_id="lose_weight", activity_level_id="very_active",
    )
    recs = generate_shopping_recommendations(profile, calculate_nutrition_targets(2000, "lose_weight"))
    assert _items(recs) == [
        "Plant-based proteins (lentils, chickpeas, quinoa)",
        "Low-glycemic vegetables (broccoli, spinach, cauliflower)",
        "Omega-3 rich foods (salmon, walnuts, flax seeds)",
        "Electrolyte-rich foods (bananas, coconut water)",
    ]


def test_priority_items_muscle_and_weight_gain(make_profile):
    for goal in ("build_muscle", "gain_weight"):
        profile = make_profile(dietary_restrictions=("vegetarian",), fitness_goal_id=goal)
        recs = generate_shopping_recommendations(profile, calculate_nutrition_targets(2500, goal))
        assert _items(recs)[:2] == [
            "Plant-based proteins (lentils, chickpeas, quinoa)",
            "Complex carbohydrates (oats, brown rice, sweet potatoes)",
        ]


def test_detailed_list():
    targets = calculate_nutrition_targets(2000, "lose_weight")
    cats = generate_detailed_shopping_list(targets)
    assert [c.category for c in cats] == [
        "Protein Sources", "Complex Carbohydrates", "Healthy Fats", "Fruits & Vegetables",
    ]
    assert cats[0].reasoning == "Target: 150g protein daily"
    assert all(len(c.items) == 3 for c in cats)
    assert cats[2].items[2].macro_profile == {"protein": 0, "carbs": 0, "fat": 100}
