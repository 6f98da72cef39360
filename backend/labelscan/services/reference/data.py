"""
Bundled ingredient reference data.
Order matters: substring matching walks records in this order and the first hit wins.
"""

from labelscan.services.reference.models import (
    AgeRestrictions,
    IngredientCategory as Cat,
    IngredientRecord,
    SafetyLevel as Level,
)


def _record(
    key: str,
    id: str,
    name: str,
    aliases: list[str],
    category: Cat,
    level: Level,
    description: str,
    health_impact: str,
    alternatives: str | None = None,
    daily_limit: str | None = None,
    children: str | None = None,
    adults: str | None = None,
    allergens: list[str] | None = None,
) -> IngredientRecord:
    restrictions = AgeRestrictions(child=children, adult=adults) if (children or adults) else None
    return IngredientRecord(
        id=id,
        key=key,
        canonical_name=name,
        aliases=frozenset(a.lower() for a in aliases),
        category=category,
        base_safety_level=level,
        description=description,
        health_impact=health_impact,
        alternatives=alternatives,
        daily_limit=daily_limit,
        age_restrictions=restrictions,
        allergen_notes=frozenset(allergens or []),
    )


INGREDIENT_RECORDS: list[IngredientRecord] = [
    # Sweeteners
    _record(
        "sugar", "sugar", "Sugar",
        ["sucrose", "cane sugar", "table sugar", "white sugar"],
        Cat.SWEETENER, Level.CAUTION,
        "Simple carbohydrate that provides quick energy but lacks nutritional value.",
        "High intake linked to obesity, dental issues, and blood sugar spikes. Contributes to empty calories.",
        alternatives="Stevia, monk fruit, or reduce overall sweetness gradually",
        daily_limit="25g recommended daily maximum (WHO guidelines)",
        children="Limit to 12g per day for children under 12",
        adults="WHO recommends less than 25g per day",
    ),
    _record(
        "high fructose corn syrup", "hfcs", "High Fructose Corn Syrup",
        ["hfcs", "corn syrup", "fructose corn syrup", "high-fructose corn syrup"],
        Cat.SWEETENER, Level.WARNING,
        "Highly processed sweetener made from corn starch, cheaper alternative to sugar.",
        "Linked to obesity, diabetes, fatty liver disease. Body processes it differently than regular sugar, "
        "bypassing normal satiety signals.",
        alternatives="Natural sweeteners like honey, maple syrup, or fruit",
        daily_limit="Avoid when possible - no safe daily limit established",
        children="Should be avoided in children under 2 years",
        adults="Limit consumption as much as possible",
    ),
    _record(
        "aspartame", "aspartame", "Aspartame",
        ["nutrasweet", "equal", "aspartame acesulfame salt", "e951"],
        Cat.SWEETENER, Level.CAUTION,
        "Artificial sweetener that is 200 times sweeter than sugar.",
        "Generally recognized as safe by FDA, but some studies suggest potential links to headaches and mood "
        "changes in sensitive individuals. Not suitable for people with phenylketonuria (PKU).",
        alternatives="Stevia, monk fruit, or small amounts of natural sugars",
        daily_limit="40mg/kg body weight per day (FDA acceptable daily intake)",
        children="Safe in normal amounts, but should be limited",
        adults="Generally safe within daily limits",
        allergens=["phenylalanine source (PKU)"],
    ),
    _record(
        "sucralose", "sucralose", "Sucralose",
        ["splenda", "e955"],
        Cat.SWEETENER, Level.SAFE,
        "Non-caloric artificial sweetener made from sugar.",
        "Generally recognized as safe with no known adverse effects in normal consumption.",
        alternatives="Stevia or monk fruit",
        daily_limit="ADI: 5mg/kg body weight per day",
    ),
    _record(
        "stevia", "stevia", "Stevia",
        ["stevia extract", "steviol glycosides", "stevia leaf extract", "e960"],
        Cat.SWEETENER, Level.SAFE,
        "Natural sweetener derived from the stevia plant.",
        "Generally safe with potential blood sugar benefits.",
    ),
    # Artificial colors
    _record(
        "yellow 5", "yellow5", "Yellow 5 (Tartrazine)",
        ["yellow 5", "tartrazine", "fd&c yellow no. 5", "yellow dye 5", "e102"],
        Cat.COLORING, Level.WARNING,
        "Artificial food coloring derived from petroleum, used to create yellow color.",
        "May cause hyperactivity in children, allergic reactions, and asthma. Linked to behavioral issues in "
        "sensitive children.",
        alternatives="Natural colorings like turmeric, annatto, or beta-carotene",
        daily_limit="7.5mg/kg body weight per day (FDA acceptable daily intake)",
        children="Avoid in children with ADHD or hyperactivity",
        adults="Generally safe but may cause allergic reactions",
        allergens=["may cause allergic reactions in sensitive individuals"],
    ),
    _record(
        "red 40", "red40", "Red 40 (Allura Red)",
        ["red 40", "allura red", "fd&c red no. 40", "red dye 40", "e129"],
        Cat.COLORING, Level.WARNING,
        "Most commonly used artificial red food coloring in the United States.",
        "May cause hyperactivity in children, allergic reactions. Some studies suggest links to behavioral problems.",
        alternatives="Natural red colorings like beet juice, paprika extract, or lycopene",
        daily_limit="7mg/kg body weight per day",
        children="Avoid in children under 3, limit in others",
        adults="Generally safe within limits but may cause reactions",
    ),
    # Preservatives
    _record(
        "bht", "bht", "BHT (Butylated Hydroxytoluene)",
        ["bht", "butylated hydroxytoluene", "butylhydroxytoluene", "e321"],
        Cat.PRESERVATIVE, Level.WARNING,
        "Synthetic antioxidant used to prevent fats from becoming rancid.",
        "Possible carcinogen, may cause liver and kidney damage. Linked to behavioral problems in children.",
        alternatives="Natural preservatives like vitamin E (tocopherols), rosemary extract",
        daily_limit="0.5mg/kg body weight per day",
        children="Should be avoided in children when possible",
        adults="Limit consumption, avoid regular intake",
    ),
    _record(
        "bha", "bha", "BHA (Butylated Hydroxyanisole)",
        ["bha", "butylated hydroxyanisole", "e320"],
        Cat.PRESERVATIVE, Level.WARNING,
        "Synthetic antioxidant preservative used in fats, cereals and snack foods.",
        "Classified as reasonably anticipated to be a human carcinogen by some agencies.",
        alternatives="Vitamin E (tocopherols) or rosemary extract",
        daily_limit="Minimize consumption",
    ),
    _record(
        "sodium benzoate", "sodium_benzoate", "Sodium Benzoate",
        ["benzoate of soda", "e211"],
        Cat.PRESERVATIVE, Level.CAUTION,
        "Common preservative that prevents growth of bacteria, yeast, and fungi.",
        "Generally safe, but may form benzene (carcinogen) when combined with vitamin C. May worsen ADHD symptoms.",
        alternatives="Natural preservation methods, vitamin E, or citric acid",
        daily_limit="5mg/kg body weight per day",
        children="Monitor intake, especially with vitamin C foods",
        adults="Safe in normal food amounts",
    ),
    _record(
        "potassium sorbate", "potassium_sorbate", "Potassium Sorbate",
        ["sorbate", "e202"],
        Cat.PRESERVATIVE, Level.SAFE,
        "Preservative that inhibits mold and yeast growth.",
        "Generally recognized as safe with minimal health concerns.",
    ),
    _record(
        "sodium nitrite", "sodium_nitrite", "Sodium Nitrite",
        ["nitrite", "e250"],
        Cat.PRESERVATIVE, Level.WARNING,
        "Preservative used in processed meats to maintain color and prevent bacterial growth.",
        "Can form nitrosamines (potential carcinogens) when cooked at high temperatures. Linked to increased "
        "cancer risk.",
        alternatives="Uncured meats, celery powder, or fresh meats without preservatives",
        daily_limit="0.07mg/kg body weight per day",
        children="Limit processed meats containing nitrites",
        adults="Minimize consumption of processed meats",
    ),
    # Natural ingredients
    _record(
        "natural vanilla flavor", "vanilla", "Natural Vanilla Flavor",
        ["vanilla extract", "natural vanilla", "vanilla flavoring"],
        Cat.FLAVOR, Level.SAFE,
        "Flavoring derived from vanilla beans, generally recognized as safe.",
        "Minimal health impact, provides pleasant taste without significant nutritional concerns.",
        alternatives="Pure vanilla extract for more authentic flavor",
        daily_limit="No specific limit established - generally safe",
        children="Safe for all ages",
        adults="Safe for all ages",
    ),
    _record(
        "organic whole grain oats", "oats", "Organic Whole Grain Oats",
        ["oats", "whole oats", "oat flour", "rolled oats"],
        Cat.NATURAL, Level.SAFE,
        "Nutrient-rich whole grain providing fiber, protein, and essential minerals.",
        "Supports heart health, digestive health, and provides sustained energy. Excellent source of beta-glucan "
        "fiber.",
        alternatives="Other whole grains like quinoa, brown rice, or barley",
        daily_limit="No upper limit - encouraged as part of healthy diet",
        children="Excellent choice for children over 6 months",
        adults="Highly recommended for all adults",
        allergens=["may contain gluten from cross-contact"],
    ),
    # Common additives
    _record(
        "monosodium glutamate", "msg", "Monosodium Glutamate (MSG)",
        ["msg", "sodium glutamate", "e621", "glutamate"],
        Cat.FLAVOR, Level.CAUTION,
        "Flavor enhancer that adds umami (savory) taste to foods.",
        "Generally recognized as safe by FDA, but some people report headaches, nausea, or flushing after "
        "consumption.",
        alternatives="Natural umami sources like mushrooms, tomatoes, or soy sauce",
        daily_limit="No specific limit, but sensitive individuals should limit intake",
        children="Safe in normal food amounts, monitor for sensitivity",
        adults="Safe for most people, avoid if sensitive",
    ),
    _record(
        "phosphoric acid", "phosphoric_acid", "Phosphoric Acid",
        ["e338", "orthophosphoric acid"],
        Cat.OTHER, Level.CAUTION,
        "Acid used to add tart flavor to sodas and processed foods.",
        "May interfere with calcium absorption, potentially weakening bones. Can erode tooth enamel.",
        alternatives="Citric acid or natural fruit acids",
        daily_limit="70mg/kg body weight per day",
        children="Limit sodas and foods containing phosphoric acid",
        adults="Moderate consumption, especially if at risk for osteoporosis",
    ),
    # Oils and fats. The non-hydrogenated entry must stay ahead of hydrogenated oil,
    # whose aliases are substrings of "non-hydrogenated ..." label text.
    _record(
        "non-hydrogenated oil", "non_hydrogenated_oil", "Non-Hydrogenated Oil",
        ["non-hydrogenated", "non hydrogenated", "unhydrogenated"],
        Cat.OTHER, Level.SAFE,
        "Vegetable oil that has not been hydrogenated.",
        "Contains no industrial trans fat. Treat it like the oil it was pressed from.",
    ),
    _record(
        "hydrogenated oil", "hydrogenated_oil", "Hydrogenated Oil",
        [
            "partially hydrogenated oil", "hydrogenated vegetable oil",
            "partially hydrogenated", "fully hydrogenated", "trans fat",
        ],
        Cat.OTHER, Level.WARNING,
        "Oil processed to be solid at room temperature.",
        "Often contains trans fats, which raise LDL cholesterol and are linked to cardiovascular disease.",
        alternatives="Olive oil, butter in moderation, or non-hydrogenated vegetable oils",
        daily_limit="Avoid or minimize",
    ),
    _record(
        "palm oil", "palm_oil", "Palm Oil",
        ["palm kernel oil", "palm fat", "palmolein"],
        Cat.OTHER, Level.CAUTION,
        "Vegetable oil derived from palm fruit.",
        "High in saturated fat. Environmental concerns about production practices.",
        alternatives="Olive oil or sunflower oil",
        daily_limit="Limit saturated fat intake",
    ),
    _record(
        "olive oil", "olive_oil", "Olive Oil",
        ["extra virgin olive oil", "virgin olive oil"],
        Cat.NATURAL, Level.SAFE,
        "Monounsaturated fat pressed from olives.",
        "Associated with heart health when used in place of saturated fats.",
    ),
    _record(
        "oil", "vegetable_oil", "Vegetable Oil",
        [
            "vegetable oils", "canola oil", "rapeseed oil", "sunflower oil",
            "soybean oil", "corn oil", "cottonseed oil", "safflower oil",
        ],
        Cat.OTHER, Level.SAFE,
        "Refined oil pressed from seeds such as soybean, canola or sunflower.",
        "Mostly unsaturated fat. Safe in normal amounts.",
        daily_limit="Part of total fat intake, about 20-35% of daily calories",
    ),
    # Staples
    _record(
        "salt", "salt", "Salt",
        ["sea salt", "table salt", "sodium chloride", "iodized salt"],
        Cat.MINERAL, Level.SAFE,
        "Sodium chloride, essential mineral used for flavor and preservation.",
        "Safe in normal amounts; excess sodium raises blood pressure.",
        daily_limit="Less than 2,300mg sodium per day",
        children="Children need less sodium than adults; avoid heavily salted snacks",
    ),
    _record(
        "water", "water", "Water",
        ["filtered water", "carbonated water", "purified water"],
        Cat.NATURAL, Level.SAFE,
        "H2O, essential for life.",
        "No health concerns.",
    ),
    _record(
        "flour", "flour", "Flour",
        ["wheat flour", "enriched flour", "all-purpose flour", "enriched wheat flour"],
        Cat.NATURAL, Level.SAFE,
        "Ground grain, typically wheat.",
        "Staple ingredient; refined flour has less fiber than whole grain.",
        alternatives="Whole wheat flour for more fiber",
        allergens=["wheat", "gluten"],
    ),
    _record(
        "yeast", "yeast", "Yeast",
        ["baker's yeast", "yeast extract", "nutritional yeast"],
        Cat.NATURAL, Level.SAFE,
        "Microorganism used for fermentation and leavening.",
        "No known health concerns for most people.",
    ),
    _record(
        "baking soda", "baking_soda", "Baking Soda",
        ["sodium bicarbonate", "bicarbonate of soda", "e500"],
        Cat.OTHER, Level.SAFE,
        "Sodium bicarbonate, leavening agent.",
        "Safe in food quantities.",
    ),
    _record(
        "lemon juice", "lemon_juice", "Lemon Juice",
        ["lemon juice concentrate"],
        Cat.NATURAL, Level.SAFE,
        "Natural citric acid from lemons.",
        "Safe; may irritate tooth enamel in large amounts.",
    ),
    _record(
        "vinegar", "vinegar", "Vinegar",
        ["white vinegar", "distilled vinegar", "apple cider vinegar"],
        Cat.NATURAL, Level.SAFE,
        "Acetic acid solution, natural preservative.",
        "Safe in food quantities.",
    ),
]
