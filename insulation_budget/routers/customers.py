from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..database import get_db

router = APIRouter(prefix="/customers", tags=["customers"])


def _get_customer_or_404(customer_id: int, db: Session) -> models.Customer:
    customer = db.query(models.Customer).filter(models.Customer.id == customer_id).first()
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


def _budget_counts(db: Session, customer_ids: List[int]) -> dict:
    """{customer_id: number of budgets issued} for the given customers."""
    if not customer_ids:
        return {}
    rows = db.query(models.Budget.customer_id, func.count(models.Budget.id)).filter(
        models.Budget.customer_id.in_(customer_ids)
    ).group_by(models.Budget.customer_id).all()
    return dict(rows)


def _summary(customer: models.Customer, budget_count: int) -> schemas.CustomerSummary:
    return schemas.CustomerSummary(
        **schemas.Customer.model_validate(customer).model_dump(),
        budget_count=budget_count,
    )


@router.post("/", response_model=schemas.Customer)
def create_customer(customer: schemas.CustomerCreate, db: Session = Depends(get_db)):
    db_customer = models.Customer(**customer.model_dump())
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer


@router.get("/", response_model=List[schemas.CustomerSummary])
def list_customers(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    """Customers by name, each with how many budgets they've been quoted."""
    customers = db.query(models.Customer).order_by(models.Customer.name).offset(skip).limit(limit).all()
    counts = _budget_counts(db, [c.id for c in customers])
    return [_summary(c, counts.get(c.id, 0)) for c in customers]


@router.get("/{customer_id}", response_model=schemas.CustomerSummary)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    customer = _get_customer_or_404(customer_id, db)
    return _summary(customer, _budget_counts(db, [customer.id]).get(customer.id, 0))


@router.get("/{customer_id}/budgets", response_model=List[schemas.Budget])
def list_customer_budgets(customer_id: int, db: Session = Depends(get_db)):
    """Budgets issued to one customer, newest first."""
    _get_customer_or_404(customer_id, db)
    return db.query(models.Budget).filter(
        models.Budget.customer_id == customer_id
    ).order_by(models.Budget.created_at.desc(), models.Budget.id.desc()).all()
