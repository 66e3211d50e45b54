"""
Budget endpoints.

POST /api/budgets/ takes the budget form (form-encoded or JSON) with the
fields customerId, insulatingMaterialId, layerThickness and areaToCover.
Validation and lookup failures are raised as BudgetError and shaped into
422/404 responses by the handler in main.py.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..budget_service import BudgetService
from ..database import get_db
from ..repository import SqlAlchemyBudgetRepository
from ..validation import FIELDS

router = APIRouter(prefix="/budgets", tags=["budgets"])


def get_budget_service(db: Session = Depends(get_db)) -> BudgetService:
    return BudgetService(SqlAlchemyBudgetRepository(db))


async def _read_fields(request: Request) -> dict:
    """Pull the budget fields out of a JSON body or a form submission."""
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="JSON body must be an object")
        return {field: body.get(field) for field in FIELDS}
    form = await request.form()
    return {field: form.get(field) for field in FIELDS}


@router.post("/", response_model=schemas.Budget)
async def create_budget(request: Request, service: BudgetService = Depends(get_budget_service)):
    fields = await _read_fields(request)
    return service.create_budget(fields)


@router.get("/estimate", response_model=schemas.BudgetEstimate)
def estimate_budget(request: Request, service: BudgetService = Depends(get_budget_service)):
    """Price and bag count for the query-string fields. Nothing is saved."""
    fields = {field: request.query_params.get(field) for field in FIELDS}
    return service.estimate(fields)


@router.get("/", response_model=List[schemas.Budget])
def list_budgets(skip: int = 0, limit: int = 50, db: Session = Depends(get_db)):
    return db.query(models.Budget).order_by(
        models.Budget.created_at.desc(), models.Budget.id.desc()
    ).offset(skip).limit(limit).all()


@router.get("/{budget_id}", response_model=schemas.Budget)
def get_budget(budget_id: int, db: Session = Depends(get_db)):
    budget = db.query(models.Budget).filter(models.Budget.id == budget_id).first()
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget
