"""
Fixed enumerations for learning-walk observations.

Year groups and teaching strategies are closed sets. The strategy table
is a single ordered key -> label mapping so the form, the CSV columns
and the details view always list strategies in the same order.
"""

from typing import Dict, List, Literal


YearGroup = Literal["Year 7", "Year 8", "Year 9", "Year 10", "Year 11"]

StrategyKey = Literal["miniWhiteboards", "thinkPairShare", "dumtums", "coldCalling"]

YEAR_GROUPS: List[str] = [
    "Year 7",
    "Year 8",
    "Year 9",
    "Year 10",
    "Year 11",
]

# Insertion order is the display and CSV column order
STRATEGY_LABELS: Dict[str, str] = {
    "miniWhiteboards": "Use of mini whiteboards",
    "thinkPairShare": "Think-Pair-Share",
    "dumtums": "DUMTUMS",
    "coldCalling": "Cold calling",
}

STRATEGY_KEYS: List[str] = list(STRATEGY_LABELS)

# Durable slot holding the whole observation collection
STORAGE_KEY = "learningWalks"

EXPORT_FILENAME_PREFIX = "learning_walks"
