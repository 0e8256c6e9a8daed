# src/vetengine/config.py
from dataclasses import dataclass

from .numeric import DEFAULT_MAX_DECIMALS
from .types import Species, WeightUnit


@dataclass(frozen=True)
class Defaults:
    """
    Starting values of a session, also what "Reset" goes back to.

    weight_text   : initial weight field text (in `unit`)
    max_decimals  : decimals kept by the weight field while typing/committing
    """
    species: Species = "dog"
    unit: WeightUnit = "lb"
    weight_text: str = "10"
    only_my_species: bool = True
    max_decimals: int = DEFAULT_MAX_DECIMALS


DEFAULTS = Defaults()
