"""USDA FoodData Central adapter."""
