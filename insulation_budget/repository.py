"""
Lookup and persistence for the budget flow.

BudgetRepository is the capability the service depends on. The SQLAlchemy
implementation backs the API; tests swap in an in-memory one.
"""

import logging
from abc import ABC, abstractmethod

from sqlalchemy.orm import Session

from . import models
from .errors import BudgetNotFoundError

logger = logging.getLogger(__name__)

CUSTOMER_NOT_FOUND = "El cliente no existe."
BAG_NOT_FOUND = "La bolsa de aislante no existe."


class BudgetRepository(ABC):
    """Reads customers and bags, writes budgets."""

    @abstractmethod
    def find_customer(self, customer_id: int) -> models.Customer:
        """Return the customer or raise BudgetNotFoundError."""
        pass

    @abstractmethod
    def find_bag_by_material_id(self, material_id: int) -> models.Bag:
        """Return the first bag of this material or raise BudgetNotFoundError."""
        pass

    @abstractmethod
    def save_budget(self, budget: models.Budget) -> models.Budget:
        """Persist a new budget and return it with its id set."""
        pass


class SqlAlchemyBudgetRepository(BudgetRepository):

    def __init__(self, db: Session):
        self.db = db

    def find_customer(self, customer_id: int) -> models.Customer:
        customer = self.db.query(models.Customer).filter(models.Customer.id == customer_id).first()
        if not customer:
            logger.warning("Customer %s not found", customer_id)
            raise BudgetNotFoundError(CUSTOMER_NOT_FOUND)
        return customer

    def find_bag_by_material_id(self, material_id: int) -> models.Bag:
        bag = self.db.query(models.Bag).filter(
            models.Bag.building_material_id == material_id
        ).order_by(models.Bag.id).first()
        if not bag:
            logger.warning("No bag for building material %s", material_id)
            raise BudgetNotFoundError(BAG_NOT_FOUND)
        return bag

    def save_budget(self, budget: models.Budget) -> models.Budget:
        self.db.add(budget)
        self.db.commit()
        self.db.refresh(budget)
        return budget
