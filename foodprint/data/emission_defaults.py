"""
Default emission lookup data for order footprint estimation.

Data Sources:
- Food: Our World in Data (food choice vs eating local), Nature Food
  (doi:10.1038/s43016-021-00225-9), CarbonCloud food emissions database
- Packaging: European Environment Agency, assorted packaging LCA studies
- Travel: DEFRA conversion factors, EEA transport emissions data

Note: These are advisory estimates, not audited factors.

Carbon Intensity Reference (kg CO2e per kg of food):
- Beef: 60.0
- Lamb: 24.0
- Chicken: 6.0
- Cheese: 13.5
- Rice: 4.0 (methane from paddy fields)
- Lentils: 0.9
- Vegetables: 0.4-1.5
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping

# Type alias for an ingredient -> grams mapping
IngredientQuantities = Dict[str, float]

# =============================================================================
# FOOD (kg CO2e per kg of food)
# =============================================================================
FOOD_EMISSIONS: Dict[str, float] = {
    # Meat and animal products
    "beef": 60.0,
    "lamb": 24.0,
    "pork": 7.0,
    "bacon": 7.2,
    "ham": 6.8,
    "chicken": 6.0,
    "turkey": 5.5,
    "duck": 9.8,
    "eggs": 4.8,

    # Seafood
    "fish": 5.1,
    "salmon": 6.0,
    "tuna": 6.1,
    "shrimp": 12.0,
    "prawns": 12.0,

    # Dairy
    "cheese": 13.5,
    "paneer": 13.0,
    "milk": 3.2,
    "butter": 12.0,
    "cream": 9.0,
    "yogurt": 2.5,
    "ghee": 12.5,

    # Plant proteins
    "lentils": 0.9,
    "tofu": 2.0,
    "beans": 1.1,
    "chickpeas": 0.9,
    "soybeans": 1.0,
    "tempeh": 2.2,
    "seitan": 1.2,
    "plant-based meat": 3.5,

    # Grains
    "wheat": 1.6,
    "rice": 4.0,
    "oats": 1.4,
    "barley": 1.0,
    "corn": 1.1,
    "quinoa": 1.3,
    "bread": 1.7,
    "pasta": 1.5,
    "flour": 1.6,

    # Vegetables
    "vegetables": 1.5,
    "potatoes": 0.5,
    "tomatoes": 1.1,
    "onions": 0.5,
    "garlic": 0.6,
    "bell pepper": 1.0,
    "tomato puree": 1.8,
    "carrots": 0.4,
    "broccoli": 0.6,
    "spinach": 0.5,
    "lettuce": 0.7,
    "kale": 0.5,
    "cabbage": 0.4,
    "cucumber": 0.6,
    "eggplant": 0.7,
    "mushrooms": 0.6,

    # Fruits
    "fruits": 1.0,
    "apples": 0.4,
    "bananas": 0.8,
    "oranges": 0.4,
    "berries": 1.1,
    "grapes": 1.0,
    "mangoes": 1.2,

    # Oils, nuts and seeds
    "oil": 3.3,
    "olive oil": 5.1,
    "coconut oil": 2.3,
    "nuts": 2.5,
    "almonds": 3.5,
    "walnuts": 2.3,
    "cashews": 2.2,
    "seeds": 1.8,

    # Spices and condiments
    "spices": 1.5,
    "sugar": 1.9,
    "salt": 0.3,
    "vinegar": 0.9,
    "tomato ketchup": 2.1,
    "mayonnaise": 4.5,

    # Beverages
    "coffee": 17.0,     # per kg of beans
    "tea": 2.0,         # per kg of leaves
    "beer": 1.1,
    "wine": 1.8,
    "soft drink": 0.5,
}

# Common names and variations -> standard names in FOOD_EMISSIONS.
# Aliases are applied before the factor lookup, so an aliased name never
# needs its own FOOD_EMISSIONS entry.
INGREDIENT_ALIASES: Dict[str, str] = {
    # Legumes
    "garbanzo beans": "chickpeas",
    "chana": "chickpeas",
    "chick peas": "chickpeas",
    "gram": "chickpeas",
    "dahl": "lentils",
    "dal": "lentils",
    "moong": "lentils",
    "masoor": "lentils",

    # Grains
    "gram flour": "flour",
    "besan": "flour",
    "maida": "flour",
    "atta": "flour",
    "naan": "bread",
    "chapati": "bread",
    "roti": "bread",
    "paratha": "bread",

    # Proteins
    "chicken breast": "chicken",
    "chicken thigh": "chicken",
    "lamb chop": "lamb",
    "ground beef": "beef",
    "minced beef": "beef",
    "steak": "beef",
    "mutton": "lamb",
    "egg": "eggs",

    # Vegetables
    "capsicum": "bell pepper",
    "pepper": "bell pepper",
    "tomato": "tomatoes",
    "onion": "onions",
    "potato": "potatoes",
    "mushroom": "mushrooms",
    "aubergine": "eggplant",
    "brinjal": "eggplant",

    # Dairy
    "cream cheese": "cheese",
    "cheddar": "cheese",
    "mozzarella": "cheese",
    "parmesan": "cheese",
    "feta": "cheese",
    "cottage cheese": "paneer",
    "creamer": "cream",
    "yoghurt": "yogurt",
    "curd": "yogurt",

    # Oils and fats
    "refined oil": "oil",
    "cooking oil": "oil",
    "vegetable oil": "oil",
    "canola oil": "oil",
    "sunflower oil": "oil",
    "margarine": "butter",

    # Sauces and condiments
    "ketchup": "tomato ketchup",
    "soy sauce": "spices",
    "hot sauce": "spices",
    "chilli sauce": "spices",
    "masala": "spices",
    "garam masala": "spices",
}

# Category factors (kg CO2e per kg) for ingredients missing from FOOD_EMISSIONS
CATEGORY_FALLBACK: Dict[str, float] = {
    "meat": 30.0,
    "seafood": 6.0,
    "dairy": 10.0,
    "vegetables": 1.0,
    "fruits": 1.0,
    "grains": 1.6,
    "spices": 1.5,
    "pulses": 0.9,
    "oil": 3.3,
    "nuts": 2.5,
    "beverages": 1.5,
    "processed": 4.0,
}

DEFAULT_CATEGORY = "vegetables"

# =============================================================================
# PACKAGING (kg CO2e per unit)
# =============================================================================
PACKAGING_EMISSIONS: Dict[str, Dict[str, float]] = {
    "plastic": {
        "small": 0.1,       # sauce container
        "medium": 0.2,      # single dish
        "large": 0.4,       # family size
    },
    "paper": {
        "small": 0.05,
        "medium": 0.1,
        "large": 0.2,
    },
    "aluminum": {
        "small": 0.15,
        "medium": 0.3,
        "large": 0.5,
    },
    "styrofoam": {
        "small": 0.15,
        "medium": 0.25,
        "large": 0.45,
    },
    "glass": {
        "small": 0.3,
        "medium": 0.5,
        "large": 0.8,
    },
}

DEFAULT_PACKAGING_TYPE = "plastic"
DEFAULT_PACKAGING_SIZE = "medium"
LARGE_PACKAGING_SIZE = "large"

# Dish count above which orders are packed in large containers
LARGE_PACKAGING_THRESHOLD = 2

# Bag, napkins and cutlery added once per order
ADDITIONAL_PACKAGING_EMISSION = 0.05

# =============================================================================
# TRAVEL (kg CO2e per km)
# =============================================================================
TRAVEL_EMISSIONS: Dict[str, float] = {
    "motorcycle": 0.115,
    "scooter": 0.09,
    "car": 0.18,
    "electric-car": 0.06,
    "van": 0.23,
    "bicycle": 0.008,       # includes lifecycle emissions
    "e-bicycle": 0.01,
    "walking": 0.0,
}

DEFAULT_TRANSPORT = "motorcycle"

# Used whenever a route cannot be resolved
FALLBACK_DISTANCE_KM = 5.0

CYCLING_TRANSPORTS = frozenset({"bicycle", "e-bicycle"})
CYCLING_PROFILE = "cycling-regular"
DRIVING_PROFILE = "driving-car"

# =============================================================================
# RECIPES (grams per standard serving)
# =============================================================================
RECIPES: Dict[str, IngredientQuantities] = {
    "kadhai paneer": {
        "paneer": 100,
        "bell pepper": 50,
        "onions": 50,
        "tomatoes": 100,
        "oil": 10,
        "spices": 5,
    },
    "tawa roti": {
        "wheat": 50,
        "oil": 2,
    },
    "dal fry": {
        "lentils": 100,
        "onions": 30,
        "tomatoes": 50,
        "oil": 10,
        "spices": 5,
    },
    "chicken curry": {
        "chicken": 150,
        "onions": 50,
        "tomatoes": 100,
        "oil": 15,
        "spices": 8,
    },
    "chole kulche": {
        "chickpeas": 150,
        "onions": 30,
        "tomatoes": 50,
        "oil": 10,
        "flour": 80,
        "butter": 5,
        "spices": 8,
    },
    "butter chicken": {
        "chicken": 200,
        "butter": 30,
        "cream": 50,
        "tomatoes": 100,
        "onions": 30,
        "spices": 10,
    },
    "palak paneer": {
        "paneer": 100,
        "spinach": 200,
        "onions": 30,
        "tomatoes": 20,
        "cream": 20,
        "oil": 10,
        "spices": 5,
    },
    "biryani": {
        "rice": 150,
        "chicken": 100,
        "onions": 50,
        "oil": 15,
        "spices": 10,
    },
    "naan": {
        "flour": 80,
        "yogurt": 20,
        "butter": 10,
    },
    "samosa": {
        "flour": 50,
        "potatoes": 80,
        "peas": 20,
        "oil": 30,
        "spices": 5,
    },
}

# Metric unit -> grams, for ingredient amounts reported by recipe services
UNIT_TO_GRAMS: Dict[str, float] = {
    "g": 1.0,
    "gram": 1.0,
    "grams": 1.0,
    "kg": 1000.0,
    "mg": 0.001,
    "ml": 1.0,
    "l": 1000.0,
    "liter": 1000.0,
    "liters": 1000.0,
    "tbsp": 15.0,
    "tbsps": 15.0,
    "tablespoon": 15.0,
    "tablespoons": 15.0,
    "tsp": 5.0,
    "tsps": 5.0,
    "teaspoon": 5.0,
    "teaspoons": 5.0,
    "cup": 240.0,
    "cups": 240.0,
}


def _freeze(table: Mapping) -> Mapping:
    return MappingProxyType({
        key: _freeze(value) if isinstance(value, Mapping) else value
        for key, value in table.items()
    })


@dataclass(frozen=True)
class EmissionTables:
    """
    Immutable bundle of every lookup table the engine reads.

    Services take one of these at construction so tests can substitute
    their own data. Use ``EmissionTables.build(...)`` to override a subset.
    """
    food: Mapping[str, float] = field(default_factory=lambda: _freeze(FOOD_EMISSIONS))
    aliases: Mapping[str, str] = field(default_factory=lambda: _freeze(INGREDIENT_ALIASES))
    categories: Mapping[str, float] = field(default_factory=lambda: _freeze(CATEGORY_FALLBACK))
    recipes: Mapping[str, Mapping[str, float]] = field(default_factory=lambda: _freeze(RECIPES))
    travel: Mapping[str, float] = field(default_factory=lambda: _freeze(TRAVEL_EMISSIONS))
    packaging: Mapping[str, Mapping[str, float]] = field(default_factory=lambda: _freeze(PACKAGING_EMISSIONS))
    default_category: str = DEFAULT_CATEGORY
    default_transport: str = DEFAULT_TRANSPORT
    default_packaging_type: str = DEFAULT_PACKAGING_TYPE
    default_packaging_size: str = DEFAULT_PACKAGING_SIZE

    @classmethod
    def build(cls, **overrides) -> "EmissionTables":
        """Build tables, freezing any mapping passed as an override."""
        frozen = {
            name: _freeze(value) if isinstance(value, Mapping) else value
            for name, value in overrides.items()
        }
        return cls(**frozen)

    @property
    def default_transport_factor(self) -> float:
        return self.travel[self.default_transport]

    def transport_factor(self, transport_type: str) -> float:
        """Per-km factor for a transport mode, default mode when unknown."""
        factor = self.travel.get(transport_type)
        if factor is None:
            return self.default_transport_factor
        return factor


DEFAULT_TABLES = EmissionTables()


def get_transport_profiles() -> Mapping[str, float]:
    """Return the transport emission profile table."""
    return DEFAULT_TABLES.travel


def get_packaging_profiles() -> Mapping[str, Mapping[str, float]]:
    """Return the packaging emission profile table."""
    return DEFAULT_TABLES.packaging
