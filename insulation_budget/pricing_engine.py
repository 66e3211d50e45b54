"""
Budget pricing: price and bag count for an insulation job.

Pure math, no database. The reference bag covers REFERENCE_COVERAGE_SQ_M
at REFERENCE_THICKNESS_MM; other thicknesses scale linearly, so a 200 mm
layer uses twice the bags of a 100 mm layer over the same area.
"""

from .config import settings


class BudgetPricingEngine:
    """Computes price and bag quantity from validated budget input."""

    def __init__(self, reference_coverage_sq_m: float = None, reference_thickness_mm: int = None):
        self.reference_coverage_sq_m = reference_coverage_sq_m or settings.REFERENCE_COVERAGE_SQ_M
        self.reference_thickness_mm = reference_thickness_mm or settings.REFERENCE_THICKNESS_MM

    def unit_price(self, layer_thickness: int, building_material) -> float:
        """Material price per m² at this thickness."""
        return building_material.unit_price_for_thickness(
            layer_thickness, reference_thickness_mm=self.reference_thickness_mm,
        )

    def calculate_price(self, layer_thickness: int, building_material, area_to_cover: float) -> float:
        """price = area × unit price for the thickness."""
        return area_to_cover * self.unit_price(layer_thickness, building_material)

    def calculate_bags_quantity(self, area_to_cover: float, layer_thickness: int) -> float:
        """
        Bags needed to cover the area.

        At the reference thickness: area / reference coverage.
        Otherwise: (area × thickness) / (reference coverage × reference thickness).
        Not rounded, callers decide how to present partial bags.
        """
        if layer_thickness == self.reference_thickness_mm:
            return area_to_cover / self.reference_coverage_sq_m
        return (area_to_cover * layer_thickness) / (
            self.reference_coverage_sq_m * self.reference_thickness_mm
        )
