# schemas.py

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.math.shares import strip_thousands_separators


# --- Heir categories (fixed taxonomy) ---
class HeirType(str, Enum):
    SPOUSE = "Spouse"
    FATHER = "Father"
    MOTHER = "Mother"
    PATERNAL_GRANDFATHER = "Paternal Grandfather"
    PATERNAL_GRANDMOTHER = "Paternal Grandmother"
    MATERNAL_GRANDMOTHER = "Maternal Grandmother"
    SONS = "Sons"
    DAUGHTERS = "Daughters"
    FULL_BROTHERS = "Full Brothers"
    FULL_SISTERS = "Full Sisters"
    PATERNAL_BROTHERS = "Paternal Brothers"
    PATERNAL_SISTERS = "Paternal Sisters"


# --- Heir catalog schemas (database) ---
class HeirCategoryBase(BaseModel):
    name_en: HeirType   # English label, one of the fixed categories
    name_ar: str        # Arabic name
    description: Optional[str] = None

class HeirCategoryCreate(HeirCategoryBase):
    pass

class HeirCategory(HeirCategoryBase):
    id: int
    model_config = ConfigDict(from_attributes=True)


# --- Survivors of the deceased ---
class SurvivorSet(BaseModel):
    """
    Snapshot of which relatives survive the deceased.
    Flags are independent; which classes actually inherit is decided by the engine.
    """
    model_config = ConfigDict(frozen=True)

    has_spouse: bool = False
    son_count: int = Field(default=0, ge=0)
    daughter_count: int = Field(default=0, ge=0)
    has_father: bool = False
    has_mother: bool = False
    full_brother_count: int = Field(default=0, ge=0)
    full_sister_count: int = Field(default=0, ge=0)
    paternal_brother_count: int = Field(default=0, ge=0)
    paternal_sister_count: int = Field(default=0, ge=0)
    has_paternal_grandfather: bool = False
    has_paternal_grandmother: bool = False
    has_maternal_grandmother: bool = False

    @property
    def has_children(self) -> bool:
        return self.son_count > 0 or self.daughter_count > 0

    @property
    def has_full_siblings(self) -> bool:
        return self.full_brother_count > 0 or self.full_sister_count > 0

    @property
    def has_siblings(self) -> bool:
        return self.has_full_siblings or (self.paternal_brother_count + self.paternal_sister_count) > 0

    @property
    def is_empty(self) -> bool:
        """True when nobody at all is flagged as surviving."""
        return not any([
            self.has_spouse,
            self.has_children,
            self.has_father,
            self.has_mother,
            self.has_siblings,
            self.has_paternal_grandfather,
            self.has_paternal_grandmother,
            self.has_maternal_grandmother,
        ])


# --- Calculation output ---
class HeirAllocation(BaseModel):
    heir_type: HeirType
    person_count: int = Field(ge=1)
    share_percent: float         # percentage of the whole estate (0-100)
    amount: float                # total for the whole category
    amount_each: float           # amount / person_count
    share_fraction: str          # e.g. "1/8", "Residuary"
    calculation_note: str        # which rule produced the share
    name_ar: Optional[str] = None  # Arabic name from the heir catalog, when it is there

class CalculationStep(BaseModel):
    label: str
    description: str

class NoEligibleHeirs(BaseModel):
    status: Literal["no_eligible_heirs"] = "no_eligible_heirs"
    estate_value: float
    baitul_mal_amount: float
    baitul_mal_percent: float = 100.0
    steps: List[CalculationStep]

class Distributed(BaseModel):
    status: Literal["distributed"] = "distributed"
    estate_value: float
    allocations: List[HeirAllocation]
    steps: List[CalculationStep]
    total_distributed: float
    undistributed_amount: float  # left over after every applicable rule, never redistributed

DistributionResult = Annotated[Union[Distributed, NoEligibleHeirs], Field(discriminator="status")]


# --- API input ---
class CalculationInput(BaseModel):
    estate_value: float = Field(gt=0)  # net estate to divide
    survivors: SurvivorSet = Field(default_factory=SurvivorSet)

    @field_validator("estate_value", mode="before")
    @classmethod
    def clean_estate_value(cls, value):
        # "100,000" from a form field
        return strip_thousands_separators(value)


# --- Simultaneous deaths (al-Gharqa) ---
class GharqaProblem(BaseModel):
    problem_name: str
    estate_value: float = Field(gt=0)
    survivors: SurvivorSet = Field(default_factory=SurvivorSet)

    @field_validator("estate_value", mode="before")
    @classmethod
    def clean_estate_value(cls, value):
        # "100,000" from a form field
        return strip_thousands_separators(value)

class GharqaInput(BaseModel):
    problems: List[GharqaProblem] = Field(min_length=1)

class GharqaResult(BaseModel):
    problem_name: str
    result: DistributionResult
