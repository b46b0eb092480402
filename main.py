# main.py

import logging
from typing import List

from fastapi import FastAPI, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

import crud
import gharqa
import models
import schemas
from calculator import InvalidEstateValue, compute_distribution
from database import CORS_ORIGINS, LOG_LEVEL, SessionLocal, engine

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# Create the catalog table if it does not exist yet
models.Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="HalalNest Inheritance Calculator",
    description="API for dividing an estate among heirs under a simplified Sunni Faraid model."
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Database session dependency ---
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
# -----------------------------------

def _with_arabic_names(db: Session, result):
    """
    Attach the catalog's Arabic name to each allocation; categories not in the
    catalog keep name_ar=None.
    """
    if result.status != "distributed" or not result.allocations:
        return result
    names = sorted({a.heir_type.value for a in result.allocations})
    arabic = {row.name_en: row.name_ar for row in crud.get_heir_categories_by_names(db, names)}
    allocations = [
        a.model_copy(update={"name_ar": arabic.get(a.heir_type.value)})
        for a in result.allocations
    ]
    return result.model_copy(update={"allocations": allocations})

@app.get("/")
def read_root():
    return {"message": "Welcome to the HalalNest inheritance calculator"}

@app.post("/heirs/", response_model=schemas.HeirCategory)
def create_heir_category_endpoint(heir: schemas.HeirCategoryCreate, db: Session = Depends(get_db)):
    """
    Add an heir category to the catalog.
    """
    if crud.get_heir_category_by_name(db, name_en=heir.name_en.value):
        raise HTTPException(status_code=400, detail="An heir category with this name already exists")
    return crud.create_heir_category(db=db, heir=heir)

@app.get("/heirs/", response_model=List[schemas.HeirCategory])
def read_heir_categories(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_heir_categories(db, skip=skip, limit=limit)

@app.post("/calculate/", response_model=schemas.DistributionResult)
def run_calculation(calculation_data: schemas.CalculationInput, db: Session = Depends(get_db)):
    """
    Main endpoint: divide the estate among the given survivors.
    """
    try:
        result = compute_distribution(calculation_data.estate_value, calculation_data.survivors)
    except InvalidEstateValue as exc:
        logger.info("Rejected calculation: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    return _with_arabic_names(db, result)

@app.post("/calculate/gharqa/", response_model=List[schemas.GharqaResult])
def run_gharqa_calculation(gharqa_data: schemas.GharqaInput, db: Session = Depends(get_db)):
    """Relatives who died together (al-Gharqa): one independent division per estate."""
    try:
        results = gharqa.solve_gharqa(gharqa_data)
    except InvalidEstateValue as exc:
        logger.info("Rejected simultaneous-death calculation: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    return [r.model_copy(update={"result": _with_arabic_names(db, r.result)}) for r in results]
