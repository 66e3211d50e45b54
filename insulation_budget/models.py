from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from .config import settings
from .database import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    company = Column(String)
    email = Column(String)
    phone = Column(String)
    address = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    budgets = relationship("Budget", back_populates="customer")


class BuildingMaterial(Base):
    """Insulating product. Unit price is per m² and depends on layer thickness."""
    __tablename__ = "building_materials"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    description = Column(Text)
    reference_unit_price = Column(Float, nullable=False, default=0.0)  # per m² at REFERENCE_THICKNESS_MM
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    thickness_prices = relationship(
        "MaterialThicknessPrice",
        back_populates="building_material",
        cascade="all, delete-orphan",
        order_by="MaterialThicknessPrice.thickness_mm",
    )
    bags = relationship("Bag", back_populates="building_material", order_by="Bag.id")

    def unit_price_for_thickness(self, thickness_mm: int, reference_thickness_mm: int = None) -> float:
        """
        Price per m² for a layer of the given thickness.

        A tier priced for exactly this thickness wins. Otherwise the reference
        price is scaled linearly from the reference thickness.
        """
        for tier in self.thickness_prices:
            if tier.thickness_mm == thickness_mm:
                return tier.unit_price

        reference = reference_thickness_mm or settings.REFERENCE_THICKNESS_MM
        return (self.reference_unit_price or 0.0) * thickness_mm / reference


class MaterialThicknessPrice(Base):
    __tablename__ = "material_thickness_prices"

    id = Column(Integer, primary_key=True, index=True)
    building_material_id = Column(Integer, ForeignKey("building_materials.id"), nullable=False)
    thickness_mm = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)

    building_material = relationship("BuildingMaterial", back_populates="thickness_prices")


class Bag(Base):
    """Purchasable packaged unit of a building material."""
    __tablename__ = "bags"

    id = Column(Integer, primary_key=True, index=True)
    building_material_id = Column(Integer, ForeignKey("building_materials.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    weight_kg = Column(Float, nullable=True)

    building_material = relationship("BuildingMaterial", back_populates="bags")


class Budget(Base):
    """
    Price quote for an insulation job.

    Written once when the quote is created. There is no update path.
    """
    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    bag_id = Column(Integer, ForeignKey("bags.id"), nullable=False)
    layer_thickness = Column(Integer, nullable=False)  # mm
    area_to_cover = Column(Float, nullable=False)  # m²
    price = Column(Float, nullable=False, default=0.0)
    totally_bags_quantity = Column(Float, nullable=False, default=0.0)
    expiration_date = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    customer = relationship("Customer", back_populates="budgets")
    bag = relationship("Bag")
