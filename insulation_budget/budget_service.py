"""
Budget creation: validate, look up, price, persist.

Strictly in that order. A validation error stops before any lookup, a
lookup miss stops before anything is written, and a successful request
writes exactly one Budget.
"""

import logging
import math
from datetime import datetime, timedelta

from . import models
from .config import settings as default_settings
from .errors import BudgetValidationError
from .pricing_engine import BudgetPricingEngine
from .repository import BudgetRepository
from .validation import MESSAGES, validate_budget_input

logger = logging.getLogger(__name__)


class BudgetService:

    def __init__(self, repository: BudgetRepository, settings=None, now=None):
        self.repository = repository
        self.settings = settings or default_settings
        self.pricing_engine = BudgetPricingEngine(
            reference_coverage_sq_m=self.settings.REFERENCE_COVERAGE_SQ_M,
            reference_thickness_mm=self.settings.REFERENCE_THICKNESS_MM,
        )
        self.now = now or datetime.utcnow

    def _price(self, data, building_material):
        """Price and bag count. An area so large the totals overflow is rejected as bad input."""
        price = self.pricing_engine.calculate_price(
            data.layer_thickness, building_material, data.area_to_cover,
        )
        bags_quantity = self.pricing_engine.calculate_bags_quantity(
            data.area_to_cover, data.layer_thickness,
        )
        if not (math.isfinite(price) and math.isfinite(bags_quantity)):
            raise BudgetValidationError({"areaToCover": [MESSAGES["areaToCover.numeric"]]})
        return price, bags_quantity

    def estimate(self, raw_fields: dict) -> dict:
        """Dry run of create_budget. Same checks, nothing saved."""
        data = validate_budget_input(raw_fields, self.settings)
        self.repository.find_customer(data.customer_id)
        bag = self.repository.find_bag_by_material_id(data.insulating_material_id)
        material = bag.building_material
        price, bags_quantity = self._price(data, material)
        return {
            "layer_thickness": data.layer_thickness,
            "area_to_cover": data.area_to_cover,
            "unit_price": self.pricing_engine.unit_price(data.layer_thickness, material),
            "price": price,
            "totally_bags_quantity": bags_quantity,
        }

    def create_budget(self, raw_fields: dict) -> models.Budget:
        """
        Validate the form fields and persist a new Budget.

        Raises BudgetValidationError or BudgetNotFoundError, both terminal,
        nothing is saved when either is raised.
        """
        data = validate_budget_input(raw_fields, self.settings)

        customer = self.repository.find_customer(data.customer_id)
        bag = self.repository.find_bag_by_material_id(data.insulating_material_id)

        price, bags_quantity = self._price(data, bag.building_material)

        budget = models.Budget(
            customer=customer,
            customer_id=customer.id,
            bag=bag,
            bag_id=bag.id,
            layer_thickness=data.layer_thickness,
            area_to_cover=data.area_to_cover,
            price=price,
            totally_bags_quantity=bags_quantity,
            expiration_date=self.now() + timedelta(days=self.settings.BUDGET_VALID_DAYS),
        )
        budget = self.repository.save_budget(budget)

        logger.info(
            "Budget %s created for customer %s: %.2f m² at %d mm, price %.2f, %.2f bags",
            budget.id, customer.id, data.area_to_cover, data.layer_thickness, price, bags_quantity,
        )
        return budget
