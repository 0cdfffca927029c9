from enum import Enum


class Category(str, Enum):
    """Topic tags a documentary can be filed under."""

    nature = "nature"
    society = "society"
    culture = "culture"
    science = "science"
    history = "history"
    travel = "travel"
    biography = "biography"
    programming = "programming"
    machine_learning = "machine learning"
    artificial_intelligence = "artificial intelligence"
    graphic_design = "graphic design"
    automation = "automation"
    computer_basics = "computer basics"
    computer_science = "computer science"
    content_creation = "content creation"
    entertainment = "entertainment"
