# crud.py

from sqlalchemy.orm import Session
import models
import schemas

def get_heir_category_by_name(db: Session, name_en: str):
    """
    Look a category up by its English label, used to refuse duplicates.
    """
    return db.query(models.HeirCategory).filter(models.HeirCategory.name_en == name_en).first()

def create_heir_category(db: Session, heir: schemas.HeirCategoryCreate):
    db_heir = models.HeirCategory(
        name_en=heir.name_en.value,
        name_ar=heir.name_ar,
        description=heir.description,
    )
    db.add(db_heir)
    db.commit()
    db.refresh(db_heir)
    return db_heir

def get_heir_categories(db: Session, skip: int = 0, limit: int = 100):
    """
    List catalog entries; 'skip' and 'limit' page through them.
    """
    return db.query(models.HeirCategory).order_by(models.HeirCategory.id).offset(skip).limit(limit).all()

def get_heir_categories_by_names(db: Session, names_en: list[str]):
    """
    Catalog entries for several English labels at once.
    """
    return db.query(models.HeirCategory).filter(models.HeirCategory.name_en.in_(names_en)).all()
