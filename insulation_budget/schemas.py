from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class CustomerBase(BaseModel):
    name: str
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

class CustomerCreate(CustomerBase):
    pass

class Customer(CustomerBase):
    id: int
    created_at: datetime
    class Config:
        from_attributes = True

class CustomerSummary(Customer):
    budget_count: int = 0

class ThicknessPrice(BaseModel):
    thickness_mm: int = Field(gt=0)
    unit_price: float = Field(ge=0)
    class Config:
        from_attributes = True

class Bag(BaseModel):
    id: int
    building_material_id: int
    name: str
    weight_kg: Optional[float] = None
    class Config:
        from_attributes = True

class BuildingMaterial(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    reference_unit_price: float
    thickness_prices: List[ThicknessPrice] = []
    bags: List[Bag] = []
    class Config:
        from_attributes = True

class BagWithMaterial(Bag):
    building_material: Optional[BuildingMaterial] = None

class ValidatedBudgetInput(BaseModel):
    customer_id: int
    insulating_material_id: int
    layer_thickness: int  # mm
    area_to_cover: float  # m²

class BudgetEstimate(BaseModel):
    layer_thickness: int
    area_to_cover: float
    unit_price: float
    price: float
    totally_bags_quantity: float

class Budget(BaseModel):
    id: int
    customer_id: int
    bag_id: int
    layer_thickness: int
    area_to_cover: float
    price: float
    totally_bags_quantity: float
    expiration_date: datetime
    created_at: datetime
    customer: Optional[Customer] = None
    bag: Optional[BagWithMaterial] = None
    class Config:
        from_attributes = True
