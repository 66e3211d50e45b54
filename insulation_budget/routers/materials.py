from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..database import get_db
from ..pricing_engine import BudgetPricingEngine

router = APIRouter(prefix="/materials", tags=["materials"])

# Default insulation catalogue: prices per m², update via the database as supplier lists change.
# reference_unit_price is the 100 mm price; tiers override it for stock thicknesses.
DEFAULT_MATERIALS = {
    "Celulosa proyectada": {
        "description": "Loose-fill cellulose, blown or sprayed",
        "reference_unit_price": 10.0,
        "thickness_prices": {50: 5.5, 100: 10.0, 150: 14.5, 200: 19.0},
        "bags": [{"name": "Bolsa celulosa 12,5 kg", "weight_kg": 12.5}],
    },
    "Lana de vidrio": {
        "description": "Glass wool, loose fill",
        "reference_unit_price": 8.0,
        "thickness_prices": {50: 4.4, 100: 8.0},
        "bags": [{"name": "Bolsa lana de vidrio 16 kg", "weight_kg": 16.0}],
    },
    "Lana de roca": {
        "description": "Rock wool, loose fill",
        "reference_unit_price": 11.5,
        "thickness_prices": {},
        "bags": [{"name": "Bolsa lana de roca 20 kg", "weight_kg": 20.0}],
    },
}


def seed_default_materials(db: Session) -> int:
    """Insert any missing catalogue materials with their tiers and bags. Returns how many were added."""
    seeded = 0
    for name, data in DEFAULT_MATERIALS.items():
        existing = db.query(models.BuildingMaterial).filter(models.BuildingMaterial.name == name).first()
        if existing:
            continue
        material = models.BuildingMaterial(
            name=name,
            description=data["description"],
            reference_unit_price=data["reference_unit_price"],
        )
        for thickness_mm, unit_price in data["thickness_prices"].items():
            material.thickness_prices.append(
                models.MaterialThicknessPrice(thickness_mm=thickness_mm, unit_price=unit_price)
            )
        for bag in data["bags"]:
            material.bags.append(models.Bag(**bag))
        db.add(material)
        seeded += 1
    db.commit()
    return seeded


@router.get("/seed")
def seed_materials(db: Session = Depends(get_db)):
    """Seed the default catalogue. Safe to run multiple times, skips existing."""
    return {"ok": True, "seeded": seed_default_materials(db)}


@router.get("/", response_model=List[schemas.BuildingMaterial])
def list_materials(db: Session = Depends(get_db)):
    return db.query(models.BuildingMaterial).order_by(models.BuildingMaterial.name).all()


@router.get("/{material_id}/unit-price")
def get_unit_price(
    material_id: int,
    layer_thickness: int = Query(..., alias="layerThickness", gt=0),
    db: Session = Depends(get_db),
):
    material = db.query(models.BuildingMaterial).filter(models.BuildingMaterial.id == material_id).first()
    if not material:
        raise HTTPException(status_code=404, detail="Material not found, run /materials/seed first")
    return {
        "building_material_id": material.id,
        "layer_thickness": layer_thickness,
        "unit_price": BudgetPricingEngine().unit_price(layer_thickness, material),
    }
