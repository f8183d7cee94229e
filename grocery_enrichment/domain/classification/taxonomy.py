"""
Classification tables.

Ordered (category, keywords) tables. The classifier walks them top to
bottom and stops at the first group with a hit, so order matters.
Keywords are lowercase and matched as whole words with an optional
plural suffix; irregular forms are listed explicitly.
"""

from typing import Final

from grocery_enrichment.domain.classification.models import ShoppingCategory

KeywordTable = tuple[tuple[ShoppingCategory, tuple[str, ...]], ...]

# Stage A: anything here never gets nutrition data
NON_FOOD_KEYWORDS: Final[KeywordTable] = (
    (
        ShoppingCategory.CLEANING_HOUSEHOLD,
        (
            "clean",
            "cleaner",
            "cleaning",
            "cleanser",
            "detergent",
            "soap",
            "bleach",
            "disinfect",
            "disinfectant",
            "disinfecting",
            "wipe",
            "sponge",
            "scrub",
            "polish",
            "spray",
            "lysol",
            "clorox",
            "ajax",
            "tide",
            "dawn",
            "windex",
            "fantastik",
            "paper towel",
            "trash bag",
            "garbage bag",
            "aluminum foil",
            "plastic wrap",
            "ziplock",
            "ziploc",
        ),
    ),
    (
        ShoppingCategory.BABY_PERSONAL_CARE,
        (
            "diaper",
            "pacifier",
            "baby bottle",
            "lotion",
            "shampoo",
            "conditioner",
            "toothpaste",
            "toothbrush",
            "deodorant",
            "tissue",
            "toilet paper",
            "razor",
            "sunscreen",
        ),
    ),
    (
        ShoppingCategory.PET_SUPPLIES,
        (
            "dog food",
            "cat food",
            "pet",
            "pet food",
            "kitty litter",
            "cat litter",
            "bird seed",
            "dog treat",
        ),
    ),
    # hardware has no category of its own
    (
        ShoppingCategory.CLEANING_HOUSEHOLD,
        (
            "battery",
            "batteries",
            "light bulb",
            "tape",
            "glue",
            "pen",
            "pencil",
            "marker",
        ),
    ),
)

# Food names containing a non-food keyword; masked out before Stage A
FOOD_PHRASES: Final[tuple[str, ...]] = (
    "polish sausage",
    "polish kielbasa",
    "polish ham",
    "polish dill",
    "clean protein",
    "clean eating",
    "clean label",
)

# Stage B fallback: scanned after NON_FOOD_KEYWORDS
FOOD_KEYWORDS: Final[KeywordTable] = (
    (
        ShoppingCategory.FROZEN,
        ("frozen", "ice", "ice cream", "popsicle"),
    ),
    (
        ShoppingCategory.BAKERY,
        (
            "bakery",
            "pizza",
            "bread",
            "bun",
            "roll",
            "bagel",
            "croissant",
            "muffin",
            "donut",
            "doughnut",
            "cake",
            "pastry",
            "pastries",
            "pie",
            "cookie",
            "brownie",
            "cupcake",
            "flour",
            "yeast",
            "tortilla",
        ),
    ),
    (
        ShoppingCategory.PRODUCE,
        (
            "tomato",
            "lettuce",
            "onion",
            "garlic",
            "pepper",
            "carrot",
            "celery",
            "potato",
            "spinach",
            "kale",
            "broccoli",
            "cauliflower",
            "cucumber",
            "zucchini",
            "squash",
            "apple",
            "banana",
            "orange",
            "lemon",
            "lime",
            "berry",
            "berries",
            "strawberry",
            "strawberries",
            "blueberry",
            "blueberries",
            "grape",
            "pear",
            "peach",
            "peaches",
            "mango",
            "mangoes",
            "pineapple",
            "cabbage",
            "fruit",
            "vegetable",
            "avocado",
            "mushroom",
            "ginger",
            "herb",
            "parsley",
            "cilantro",
            "basil",
        ),
    ),
    (
        ShoppingCategory.MEAT_SEAFOOD,
        (
            "chicken",
            "beef",
            "pork",
            "turkey",
            "lamb",
            "fish",
            "salmon",
            "tuna",
            "shrimp",
            "cod",
            "tilapia",
            "crab",
            "meat",
            "steak",
            "ground beef",
            "breast",
            "thigh",
            "wing",
            "bacon",
            "sausage",
            "ham",
        ),
    ),
    (
        ShoppingCategory.DAIRY,
        (
            "milk",
            "cheese",
            "butter",
            "cream",
            "yogurt",
            "dairy",
            "egg",
            "parmesan",
            "cheddar",
            "mozzarella",
        ),
    ),
    (
        ShoppingCategory.PANTRY,
        (
            "oil",
            "vinegar",
            "salt",
            "spice",
            "sugar",
            "rice",
            "pasta",
            "noodle",
            "sauce",
            "can",
            "canned",
            "jar",
            "stock",
            "broth",
            "honey",
            "mustard",
            "mayo",
            "mayonnaise",
            "ketchup",
            "bean",
            "cereal",
            "oats",
        ),
    ),
    (
        ShoppingCategory.BEVERAGES,
        (
            "juice",
            "soda",
            "water",
            "coffee",
            "tea",
            "drink",
            "beverage",
            "wine",
            "beer",
        ),
    ),
    (
        ShoppingCategory.SNACKS,
        (
            "chip",
            "cracker",
            "candy",
            "candies",
            "snack",
            "popcorn",
            "pretzel",
            "nut",
        ),
    ),
)

# Stage B first choice: provider category strings (Kroger catalog
# aisles and USDA food categories)
PROVIDER_CATEGORY_KEYWORDS: Final[KeywordTable] = (
    (ShoppingCategory.CLEANING_HOUSEHOLD, ("cleaning", "household", "paper", "laundry")),
    (
        ShoppingCategory.BABY_PERSONAL_CARE,
        ("baby", "personal care", "health", "beauty"),
    ),
    (ShoppingCategory.PET_SUPPLIES, ("pet", "pet care")),
    (ShoppingCategory.FROZEN, ("frozen",)),
    (ShoppingCategory.PRODUCE, ("produce", "fruit", "fruits", "vegetable", "vegetables")),
    (
        ShoppingCategory.MEAT_SEAFOOD,
        (
            "meat",
            "seafood",
            "beef products",
            "pork products",
            "poultry",
            "poultry products",
            "finfish",
            "shellfish",
            "lamb",
        ),
    ),
    (ShoppingCategory.DAIRY, ("dairy", "eggs", "dairy and egg products")),
    (ShoppingCategory.BAKERY, ("bakery", "bread", "baked products")),
    (ShoppingCategory.BEVERAGES, ("beverage", "beverages", "drinks", "coffee")),
    (ShoppingCategory.SNACKS, ("snack", "snacks", "candy", "sweets")),
    (
        ShoppingCategory.PANTRY,
        (
            "pantry",
            "canned",
            "canned & packaged",
            "baking goods",
            "condiment",
            "condiments",
            "pasta",
            "breakfast",
            "international",
            "spices",
            "fats and oils",
            "cereal grains",
            "legumes",
            "soups",
        ),
    ),
)
