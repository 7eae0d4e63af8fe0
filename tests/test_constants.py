"""
Realistic test constants for the meal plan parser test suite.

Messages mirror what the assistant actually sends: prose around a JSON object
for the current revision, tag blocks for the legacy one.
"""

# =============================================================================
# PATIENT TARGETS - Intake form values
# =============================================================================

TARGETS = {
    "emma": {
        "target_kcal": 2000,
        "distribution": {"p_perc": 30, "f_perc": 25, "c_perc": 45},
        # 2000 * 30% / 4, 2000 * 25% / 9, 2000 * 45% / 4
        "expected": {"kcal": 2000, "proteins": 150, "fats": 56, "carbs": 225},
    },
    "raj": {
        "target_kcal": 1962,
        "distribution": {"p_perc": 30, "f_perc": 25, "c_perc": 45},
        # fats land exactly on 54.5 and must round up
        "expected": {"kcal": 1962, "proteins": 147, "fats": 55, "carbs": 221},
    },
}

# =============================================================================
# SINGLE-DAY PLANS - Current JSON revision
# =============================================================================

VALID_MEAL_PLAN = {
    "meal_plan": {
        "daily_summary": {"kcal": 2000, "proteins": 150, "fats": 56, "carbs": 225},
        "meals": [
            {
                "name": "  Oatmeal with berries ",
                "ingredients": "oats 60g, blueberries 100g, milk 200ml",
                "preparation": "Cook the oats in milk for 5 minutes, top with berries.",
                "summary": {"kcal": 450.4, "protein": 18.5, "fat": 9.5, "carb": 72.49},
            },
            {
                "name": "Grilled chicken salad",
                "ingredients": "chicken breast 180g, lettuce 100g, olive oil 10ml",
                "preparation": "Grill the chicken in a {large} pan, slice and toss with greens.",
                "summary": {"kcal": 620, "protein": 55, "fat": 22, "carb": 30},
            },
        ],
    },
    "comments": "High-protein day tailored to your training schedule.",
}

VALID_COMMENTS = "High-protein day tailored to your training schedule."

# First meal after normalization: trimmed name, p/f/c names, half-up rounding
NORMALIZED_FIRST_MEAL = {
    "name": "Oatmeal with berries",
    "kcal": 450,
    "p": 19,
    "f": 10,
    "c": 72,
}

PROSE_ONLY_MESSAGE = "Sure! Could you tell me whether you prefer fish or poultry for dinner?"

UNBALANCED_JSON_MESSAGE = (
    'Here is the plan: {"meal_plan": {"daily_summary": {"kcal": 2000, '
    '"proteins": 150, "fats": 56, "carbs": 225}, "meals": ['
)

NAN_JSON_MESSAGE = (
    '{"meal_plan": {"daily_summary": {"kcal": NaN, "proteins": 150, "fats": 56, "carbs": 225}, '
    '"meals": [{"name": "Toast", "ingredients": "bread", "preparation": "Toast it.", '
    '"summary": {"kcal": 200, "protein": 6, "fat": 2, "carb": 38}}]}}'
)

TRAILING_COMMA_JSON_MESSAGE = '{"meal_plan": {"meals": [],}, "comments": "Broken"}'

# =============================================================================
# SINGLE-DAY PLANS - Legacy tag revision
# =============================================================================

XML_MESSAGE = """Here is the plan you asked for.
<meal_plan>
<daily_summary>
<kcal>1800</kcal>
<proteins>120</proteins>
<fats>60</fats>
<carbs>180</carbs>
</daily_summary>
<meals>
<meal>
<name>Greek yogurt bowl</name>
<ingredients>greek yogurt 200g, honey 10g, walnuts 20g</ingredients>
<preparation>Mix the yogurt with honey and top with walnuts.</preparation>
<summary>
<kcal>350.5</kcal>
<protein>22</protein>
<fat>14.4</fat>
<carb>30</carb>
</summary>
</meal>
<meal>
<NAME>Salmon with quinoa</NAME>
<Ingredients>salmon 150g, quinoa 80g, broccoli 150g</Ingredients>
<preparation>Bake the salmon at 200C for 15 minutes, serve over quinoa.</preparation>
<summary>
<kcal>640</kcal>
<PROTEIN>45</PROTEIN>
<fat>24</fat>
<carb>58</carb>
</summary>
</meal>
</meals>
</meal_plan>
<comments>
Keep quinoa portions moderate on rest days.
</comments>"""

XML_COMMENTS = "Keep quinoa portions moderate on rest days."

XML_WITHOUT_DAILY_SUMMARY = """<meals>
<meal>
<name>Lentil soup</name>
<ingredients>red lentils 80g, carrot 100g, onion 50g</ingredients>
<preparation>Simmer everything for 25 minutes and blend.</preparation>
<summary>
<kcal>390</kcal>
<protein>24</protein>
<fat>6</fat>
<carb>60</carb>
</summary>
</meal>
</meals>"""

XML_UNCLOSED_MEALS = """<meals>
<meal>
<name>Lentil soup</name>
</meal>
<comments>I could not finish the plan, sorry.</comments>"""

XML_BAD_LEAVES = """<meals>
<meal>
<ingredients>rice 80g</ingredients>
<preparation>Boil.</preparation>
<summary>
<kcal>lots</kcal>
<protein>5</protein>
<fat>1</fat>
<carb>60</carb>
</summary>
</meal>
</meals>"""

# =============================================================================
# MULTI-DAY PLANS
# =============================================================================

MULTI_DAY_PLAN = {
    "multi_day_plan": {
        "days": [
            {
                "day_number": 1,
                "name": "Monday",
                "meal_plan": {
                    "daily_summary": {"kcal": 2000, "proteins": 150, "fats": 56, "carbs": 225},
                    "meals": [
                        {
                            "name": "Scrambled eggs on toast",
                            "ingredients": "eggs 3, wholegrain bread 60g",
                            "preparation": "Scramble the eggs over low heat.",
                            "summary": {"kcal": 420, "protein": 26, "fat": 20, "carb": 32},
                        }
                    ],
                },
            },
            {
                "day_number": 2,
                "name": "Tuesday",
                "meal_plan": {
                    "daily_summary": {"kcal": 1800, "proteins": 120, "fats": 60, "carbs": 180},
                    "meals": [
                        {
                            "name": "Tofu stir-fry",
                            "ingredients": "tofu 200g, bell pepper 100g, soy sauce 15ml",
                            "preparation": "Stir-fry the tofu and vegetables for 8 minutes.",
                            "summary": {"kcal": 510, "protein": 32, "fat": 24, "carb": 38},
                        }
                    ],
                },
            },
        ],
        "summary": {
            "number_of_days": 2,
            "average_kcal": 1900,
            "average_proteins": 135,
            "average_fats": 58,
            "average_carbs": 202.5,
        },
    }
}
