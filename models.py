# models.py

from sqlalchemy import Column, Integer, String
from database import Base

# Catalog of the heir categories the calculator knows about
class HeirCategory(Base):
    __tablename__ = "heir_categories"

    id = Column(Integer, primary_key=True, index=True)
    name_en = Column(String, unique=True, index=True)  # label used in calculation results
    name_ar = Column(String, unique=True)
    description = Column(String, nullable=True)
