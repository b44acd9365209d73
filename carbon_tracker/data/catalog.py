"""Activity catalog: the closed set of loggable activities and their emissions.

Every activity belongs to exactly one category and carries a fixed emission
value in kg CO2e. Logged activities always take their value from here.
"""

from enum import Enum

from carbon_tracker.exceptions import ValidationError


class Category(str, Enum):
    """Emission categories."""

    TRANSPORT = "Transport"
    FOOD = "Food"
    ENERGY = "Energy"
    WASTE = "Waste"
    WATER = "Water"
    SHOPPING = "Shopping"


ACTIVITY_CATALOG: dict[Category, dict[str, float]] = {
    Category.TRANSPORT: {
        "Car (10km)": 2.3,
        "Bus (10km)": 1.0,
        "Train (10km)": 0.4,
        "Bike (10km)": 0.0,
        "Walk (10km)": 0.0,
        "Flight (1hr domestic)": 90.0,
        "Flight (international, economy)": 250.0,
    },
    Category.FOOD: {
        "Beef (200g)": 5.4,
        "Chicken (200g)": 1.4,
        "Pork (200g)": 1.5,
        "Eggs (2 eggs)": 0.5,
        "Vegetarian Meal": 0.9,
        "Vegan Meal": 0.6,
        "Dairy (250ml milk)": 0.8,
    },
    Category.ENERGY: {
        "Electricity (5 kWh)": 2.1,
        "Electricity (10 kWh)": 4.2,
        "Gas Heater (1 hr)": 2.0,
        "Air Conditioner (1 hr)": 1.5,
        "LED Lights (1 hr)": 0.01,
        "Boil kettle (1x)": 0.05,
    },
    Category.WASTE: {
        "Landfill Waste (1 bag)": 2.5,
        "Recycled Waste (1 bag)": 0.5,
        "Composted Waste (1 bag)": 0.1,
        "Plastic Bottle Thrown": 0.08,
        "Plastic Bottle Recycled": 0.02,
    },
    Category.WATER: {
        "Shower (10 mins)": 0.9,
        "Bath": 1.5,
        "Tap left running (1 min)": 0.02,
        "Toilet Flush": 0.01,
        "Washing Machine (1 load)": 0.6,
        "Dishwasher (1 load)": 0.7,
    },
    Category.SHOPPING: {
        "New T-shirt": 7.0,
        "New Jeans": 33.4,
        "Smartphone": 70.0,
        "Laptop": 300.0,
        "Plastic Bag Used": 0.03,
        "Plastic Bag Reused": 0.0,
    },
}


def parse_category(category: str | Category) -> Category:
    """Return the Category for a name, raising ValidationError if unknown."""
    try:
        return Category(category)
    except ValueError:
        raise ValidationError(f'"{category}" is not a valid category') from None


def emission_value(category: str | Category, activity: str) -> float:
    """Look up the emission value for a category/activity combination."""
    parsed = parse_category(category)
    activities = ACTIVITY_CATALOG[parsed]
    if activity not in activities:
        raise ValidationError(
            f'"{activity}" is not a valid activity for category "{parsed.value}"'
        )
    return activities[activity]


def catalog_as_dict() -> dict[str, dict[str, float]]:
    """Serializable view of the catalog keyed by category name."""
    return {category.value: dict(activities) for category, activities in ACTIVITY_CATALOG.items()}
