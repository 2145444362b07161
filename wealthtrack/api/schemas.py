"""
Request schemas for financial records.

Records are accepted in the persisted camelCase shape (interestRate,
termYears, ...) as well as snake_case, and converted to engine records.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wealthtrack.calculations.models import (
    BudgetEntry,
    EntryType,
    FinancialEntry,
    IncomeEntry,
    InvestmentPerformance,
)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps are taken as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RecordModel(BaseModel):
    """Base for record schemas."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class PerformanceInput(RecordModel):
    """Investment performance schema."""

    return_1y: float = Field(alias="return1Y")
    return_5y: Optional[float] = Field(default=None, alias="return5Y")
    return_max: Optional[float] = None
    history_1y: List[float] = Field(default_factory=list, alias="history1Y")
    history_5y: Optional[List[float]] = Field(default=None, alias="history5Y")
    history_max: Optional[List[float]] = None

    def to_domain(self) -> InvestmentPerformance:
        return InvestmentPerformance(**self.model_dump())


class EntryInput(RecordModel):
    """Financial entry schema."""

    id: str
    type: EntryType
    category: str
    name: str
    value: float = Field(ge=0)
    updated_at: Optional[datetime] = None

    interest_rate: Optional[float] = None
    interest_type: Optional[str] = None
    term_years: Optional[float] = Field(default=None, le=100)

    is_depreciating: bool = False
    original_value: Optional[float] = None
    purchase_date: Optional[datetime] = None
    depreciation_rate: Optional[float] = None
    depreciation_method: Optional[str] = None

    performance: Optional[PerformanceInput] = None

    @field_validator("updated_at", "purchase_date")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    def to_domain(self) -> FinancialEntry:
        data = self.model_dump(exclude={"performance"})
        data["performance"] = self.performance.to_domain() if self.performance else None
        return FinancialEntry(**data)


class BudgetInput(RecordModel):
    """Budget schema."""

    id: str
    category: str
    limit: float
    spent: float = 0.0

    def to_domain(self) -> BudgetEntry:
        return BudgetEntry(**self.model_dump())


class IncomeInput(RecordModel):
    """Income schema."""

    id: str
    category: str
    amount: float
    allocated_category: Optional[str] = None

    def to_domain(self) -> IncomeEntry:
        return IncomeEntry(**self.model_dump())


def to_entries(entries: List[EntryInput]) -> List[FinancialEntry]:
    return [entry.to_domain() for entry in entries]
