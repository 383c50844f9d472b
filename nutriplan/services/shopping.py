# nutriplan/services/shopping.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from nutriplan.services.catalog import is_high_activity
from nutriplan.services.health import HealthProfile, NutritionTargets, round_int


@dataclass
class FocusArea:
    category: str
    target_percentage: int
    reasoning: str


@dataclass
class PriorityItem:
    item: str
    reason: str


@dataclass
class ShoppingRecommendations:
    focus_areas: List[FocusArea]
    priority_items: List[PriorityItem]


@dataclass
class ShoppingItem:
    name: str
    quantity: str
    priority: str  # "essential" | "recommended" | "optional"
    health_benefit: str
    calories: float
    macro_profile: Dict[str, float]


@dataclass
class ShoppingCategory:
    category: str
    items: List[ShoppingItem]
    reasoning: str


def _pct(part_kcal: float, total_kcal: float) -> int:
    if not total_kcal:
        return 0
    return round_int(part_kcal / total_kcal * 100)


def _focus_areas(t: NutritionTargets) -> List[FocusArea]:
    return [
        FocusArea(
            category="Protein Sources",
            target_percentage=_pct(t.protein.calories, t.total_calories),
            reasoning=f"Aim for {t.protein.grams}g of protein daily to support muscle maintenance and satiety.",
        ),
        FocusArea(
            category="Complex Carbohydrates",
            target_percentage=_pct(t.carbs.calories, t.total_calories),
            reasoning=f"Target {t.carbs.grams}g of carbs daily for sustained energy from whole grains and vegetables.",
        ),
        FocusArea(
            category="Healthy Fats",
            target_percentage=_pct(t.fat.calories, t.total_calories),
            reasoning=f"Include {t.fat.grams}g of healthy fats daily for hormone production and nutrient absorption.",
        ),
        FocusArea(
            category="Fiber & Micronutrients",
            target_percentage=5,
            reasoning=f"Prioritize fruits and vegetables to reach {t.fiber}g of fiber daily for digestive health.",
        ),
    ]


# Each rule group is evaluated in order; within a group the first matching
# predicate wins. A group whose predicates all miss contributes nothing.
_Rule = Tuple[Callable[[HealthProfile], bool], PriorityItem]

_PRIORITY_RULES: List[List[_Rule]] = [
    [
        (
            lambda p: "vegetarian" in p.dietary_restrictions or "vegan" in p.dietary_restrictions,
            PriorityItem(
                item="Plant-based proteins (lentils, chickpeas, quinoa)",
                reason="Complete amino acid profiles for vegetarian/vegan diet",
            ),
        ),
        (
            lambda p: True,
            PriorityItem(
                item="Lean proteins (chicken breast, fish, eggs)",
                reason="High biological value protein for muscle maintenance",
            ),
        ),
    ],
    [
        (
            lambda p: p.fitness_goal_id == "lose_weight",
            PriorityItem(
                item="Low-glycemic vegetables (broccoli, spinach, cauliflower)",
                reason="High fiber, low calorie density for weight loss",
            ),
        ),
        (
            lambda p: p.fitness_goal_id in ("build_muscle", "gain_weight"),
            PriorityItem(
                item="Complex carbohydrates (oats, brown rice, sweet potatoes)",
                reason="Energy for workouts and muscle growth",
            ),
        ),
        (
            lambda p: True,
            PriorityItem(
                item="Whole grains and starchy vegetables",
                reason="Sustained energy for daily activities",
            ),
        ),
    ],
    [
        (
            lambda p: True,
            PriorityItem(
                item="Omega-3 rich foods (salmon, walnuts, flax seeds)",
                reason="Anti-inflammatory fats for heart and brain health",
            ),
        ),
    ],
    [
        (
            lambda p: is_high_activity(p.activity_level_id),
            PriorityItem(
                item="Electrolyte-rich foods (bananas, coconut water)",
                reason="Replace minerals lost through intense exercise",
            ),
        ),
    ],
]


def generate_shopping_recommendations(
    profile: HealthProfile, nutrition_targets: NutritionTargets
) -> ShoppingRecommendations:
    items: List[PriorityItem] = []
    for group in _PRIORITY_RULES:
        for predicate, suggestion in group:
            if predicate(profile):
                items.append(PriorityItem(item=suggestion.item, reason=suggestion.reason))
                break
    return ShoppingRecommendations(focus_areas=_focus_areas(nutrition_targets), priority_items=items)


# name, quantity, priority, benefit, kcal, (protein, carbs, fat)
_DETAILED_ITEMS: Dict[str, List[Tuple[str, str, str, str, float, Tuple[float, float, float]]]] = {
    "Protein Sources": [
        ("Chicken Breast", "1-2 lbs", "essential", "Lean protein for muscle maintenance", 165, (31, 0, 3.6)),
        ("Salmon", "1 lb", "recommended", "Omega-3 fatty acids and high-quality protein", 208, (22, 0, 12)),
        ("Greek Yogurt", "2-3 containers", "essential", "Probiotics and casein protein", 130, (15, 9, 4)),
    ],
    "Complex Carbohydrates": [
        ("Brown Rice", "2 lbs", "essential", "Sustained energy and fiber", 216, (5, 44, 1.8)),
        ("Quinoa", "1 lb", "recommended", "Complete protein and fiber", 222, (8, 39, 3.6)),
        ("Sweet Potatoes", "3-4 pieces", "recommended", "Beta-carotene and complex carbs", 112, (2, 26, 0.1)),
    ],
    "Healthy Fats": [
        ("Avocados", "4-5 pieces", "essential", "Monounsaturated fats and fiber", 160, (2, 9, 15)),
        ("Almonds", "1 lb", "recommended", "Vitamin E and healthy fats", 161, (6, 6, 14)),
        ("Olive Oil", "1 bottle", "essential", "Heart-healthy monounsaturated fats", 884, (0, 0, 100)),
    ],
    "Fruits & Vegetables": [
        ("Spinach", "2-3 bags", "essential", "Iron, vitamins, and antioxidants", 23, (2.9, 3.6, 0.4)),
        ("Blueberries", "2 cups", "recommended", "Antioxidants and natural sweetness", 84, (1, 21, 0.5)),
        ("Broccoli", "2-3 heads", "essential", "Fiber, vitamins C and K", 55, (3, 11, 0.6)),
    ],
}


def generate_detailed_shopping_list(nutrition_targets: NutritionTargets) -> List[ShoppingCategory]:
    """Fixed staple list per food group, annotated with the day's gram targets."""
    reasoning = {
        "Protein Sources": f"Target: {nutrition_targets.protein.grams}g protein daily",
        "Complex Carbohydrates": f"Target: {nutrition_targets.carbs.grams}g carbs daily",
        "Healthy Fats": f"Target: {nutrition_targets.fat.grams}g healthy fats daily",
        "Fruits & Vegetables": "Micronutrients, fiber, and antioxidants for optimal health",
    }
    out: List[ShoppingCategory] = []
    for category, rows in _DETAILED_ITEMS.items():
        items = [
            ShoppingItem(
                name=name,
                quantity=qty,
                priority=prio,
                health_benefit=benefit,
                calories=kcal,
                macro_profile={"protein": p, "carbs": c, "fat": f},
            )
            for (name, qty, prio, benefit, kcal, (p, c, f)) in rows
        ]
        out.append(ShoppingCategory(category=category, items=items, reasoning=reasoning[category]))
    return out
