"""Fixed datasets loaded by the seed endpoints."""

from typing import Any, Dict, List

INITIAL_DATA: List[Dict[str, Any]] = [
    {"year": 2024, "autonomous_community": "andalucia", "number_of_accidents": 10034, "percentage_of_large_fires": 0.39},
    {"year": 2024, "autonomous_community": "aragon", "number_of_accidents": 5877, "percentage_of_large_fires": 0.59},
    {"year": 2024, "autonomous_community": "asturias", "number_of_accidents": 19003, "percentage_of_large_fires": 0.25},
    {"year": 2024, "autonomous_community": "comunidad valenciana", "number_of_accidents": 6982, "percentage_of_large_fires": 0.68},
    {"year": 2024, "autonomous_community": "canarias", "number_of_accidents": 1313, "percentage_of_large_fires": 0.82},
    {"year": 2024, "autonomous_community": "cantabria", "number_of_accidents": 8316, "percentage_of_large_fires": 0.29},
    {"year": 2024, "autonomous_community": "castilla-la mancha", "number_of_accidents": 9864, "percentage_of_large_fires": 0.42},
    {"year": 2024, "autonomous_community": "castilla y leon", "number_of_accidents": 20343, "percentage_of_large_fires": 0.47},
    {"year": 2024, "autonomous_community": "cataluña", "number_of_accidents": 7756, "percentage_of_large_fires": 0.37},
    {"year": 2024, "autonomous_community": "ceuta", "number_of_accidents": 7, "percentage_of_large_fires": 0},
    {"year": 2024, "autonomous_community": "comunidad de madrid", "number_of_accidents": 6390, "percentage_of_large_fires": 0.48},
]

# Historical series for 2006 and 2016.
ALVARO_DATA: List[Dict[str, Any]] = [
    {"year": 2006, "autonomous_community": "andalucia", "number_of_accidents": 8034, "percentage_of_large_fires": 0.19},
    {"year": 2006, "autonomous_community": "aragon", "number_of_accidents": 3877, "percentage_of_large_fires": 0.39},
    {"year": 2006, "autonomous_community": "asturias", "number_of_accidents": 17003, "percentage_of_large_fires": 0.05},
    {"year": 2006, "autonomous_community": "comunidad valenciana", "number_of_accidents": 3982, "percentage_of_large_fires": 0.48},
    {"year": 2006, "autonomous_community": "canarias", "number_of_accidents": 1113, "percentage_of_large_fires": 0.72},
    {"year": 2006, "autonomous_community": "cantabria", "number_of_accidents": 6316, "percentage_of_large_fires": 0.09},
    {"year": 2006, "autonomous_community": "castilla-la mancha", "number_of_accidents": 7864, "percentage_of_large_fires": 0.22},
    {"year": 2006, "autonomous_community": "castilla y leon", "number_of_accidents": 18343, "percentage_of_large_fires": 0.27},
    {"year": 2006, "autonomous_community": "cataluña", "number_of_accidents": 5756, "percentage_of_large_fires": 0.17},
    {"year": 2006, "autonomous_community": "ceuta", "number_of_accidents": 5, "percentage_of_large_fires": 0},
    {"year": 2006, "autonomous_community": "comunidad de madrid", "number_of_accidents": 4390, "percentage_of_large_fires": 0.28},
    {"year": 2016, "autonomous_community": "andalucia", "number_of_accidents": 8347, "percentage_of_large_fires": 0.17},
    {"year": 2016, "autonomous_community": "aragon", "number_of_accidents": 3567, "percentage_of_large_fires": 0.37},
    {"year": 2016, "autonomous_community": "asturias", "number_of_accidents": 16200, "percentage_of_large_fires": 0.04},
    {"year": 2016, "autonomous_community": "comunidad valenciana", "number_of_accidents": 3802, "percentage_of_large_fires": 0.46},
    {"year": 2016, "autonomous_community": "canarias", "number_of_accidents": 1056, "percentage_of_large_fires": 0.7},
    {"year": 2016, "autonomous_community": "cantabria", "number_of_accidents": 6269, "percentage_of_large_fires": 0.09},
    {"year": 2016, "autonomous_community": "castilla-la mancha", "number_of_accidents": 7390, "percentage_of_large_fires": 0.2},
    {"year": 2016, "autonomous_community": "castilla y leon", "number_of_accidents": 19100, "percentage_of_large_fires": 0.23},
    {"year": 2016, "autonomous_community": "cataluña", "number_of_accidents": 5345, "percentage_of_large_fires": 0.17},
    {"year": 2016, "autonomous_community": "ceuta", "number_of_accidents": 4, "percentage_of_large_fires": 0},
    {"year": 2016, "autonomous_community": "comunidad de madrid", "number_of_accidents": 4909, "percentage_of_large_fires": 0.3},
]
