"""
Budget form validation.

Each field has an ordered rule chain. A field stops at its first failing
rule (bail), but every field is checked, so the caller gets one message
per bad field in a single round trip.

Messages are shown to the customer as-is and are not translated here.
"""

import math
from typing import Callable, Dict, List, Optional, Tuple

from .config import settings as default_settings
from .errors import BudgetValidationError
from .schemas import ValidatedBudgetInput

MESSAGES = {
    "customerId.required": "Debe ingresar el cliente.",
    "customerId.min": "El cliente ingresado no es correcto.",
    "insulatingMaterialId.required": "Debe ingresar el material aislante.",
    "insulatingMaterialId.min": "El material aislante ingresado no es correcto.",
    "layerThickness.required": "Debe ingresar el espesor de la capa a aplicar.",
    "layerThickness.numeric": "El espesor de la capa a aplicar debe ser un número.",
    "layerThickness.min": "Debe ingresar una capa de 50mm como mínimo.",
    "layerThickness.max": "Debe ingresar una capa de 200mm como máximo.",
    "areaToCover.required": "Debe ingresar el área a cubrir en metros cuadrados.",
    "areaToCover.numeric": "El área a cubrir ingresada es incorrecta.",
    "areaToCover.min": "El área a cubrir ingresada es incorrecta, la superficie debe ser de 4,5 metros cuadrados como mínimo.",
}

FIELDS = ["customerId", "insulatingMaterialId", "layerThickness", "areaToCover"]

MAX_IDENTIFIER = 2**63 - 1


def to_number(value) -> Optional[float]:
    """Parse a form value as a finite number. None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _present(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def _identifier_at_least(minimum: int) -> Callable:
    # Identifiers are whole numbers that fit a signed 64-bit column
    def check(value) -> bool:
        number = to_number(value)
        return number is not None and number.is_integer() and minimum <= int(number) <= MAX_IDENTIFIER
    return check


def _at_least(minimum: float) -> Callable:
    return lambda value: to_number(value) >= minimum


def _at_most(maximum: float) -> Callable:
    return lambda value: to_number(value) <= maximum


def build_rules(settings=None) -> Dict[str, List[Tuple[str, Callable]]]:
    """Rule chains per field, in evaluation order. Limits come from settings."""
    settings = settings or default_settings
    return {
        "customerId": [
            ("required", _present),
            ("min", _identifier_at_least(1)),
        ],
        "insulatingMaterialId": [
            ("required", _present),
            ("min", _identifier_at_least(1)),
        ],
        "layerThickness": [
            ("required", _present),
            ("numeric", lambda v: to_number(v) is not None),
            ("min", _at_least(settings.LAYER_THICKNESS_MIN_MM)),
            ("max", _at_most(settings.LAYER_THICKNESS_MAX_MM)),
        ],
        "areaToCover": [
            ("required", _present),
            ("numeric", lambda v: to_number(v) is not None),
            ("min", _at_least(settings.AREA_TO_COVER_MIN_SQ_M)),
        ],
    }


def collect_errors(raw: dict, settings=None) -> Dict[str, List[str]]:
    """Run every field's rule chain. Returns {field: [messages]} for failures only."""
    errors = {}
    for field, rules in build_rules(settings).items():
        value = raw.get(field)
        for rule_name, check in rules:
            if not check(value):
                errors.setdefault(field, []).append(MESSAGES[f"{field}.{rule_name}"])
                break  # bail, later rules assume earlier ones passed
    return errors


def validate_budget_input(raw: dict, settings=None) -> ValidatedBudgetInput:
    """
    Validate the raw budget form fields.

    Raises BudgetValidationError with the per-field messages if anything
    fails. Otherwise returns the typed input. Layer thickness is whole
    millimeters, so a fractional value is truncated.
    """
    errors = collect_errors(raw, settings)
    if errors:
        raise BudgetValidationError(errors)

    return ValidatedBudgetInput(
        customer_id=int(to_number(raw["customerId"])),
        insulating_material_id=int(to_number(raw["insulatingMaterialId"])),
        layer_thickness=int(to_number(raw["layerThickness"])),
        area_to_cover=to_number(raw["areaToCover"]),
    )
