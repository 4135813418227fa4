# src/propvest/domain/property.py
from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from propvest.domain.units import AnnualAmount, MonthlyAmount

PropertyType = Literal[
    "Single Family",
    "Multi-family",
    "Duplex",
    "Triplex",
    "Fourplex",
    "Townhouse",
    "Condo",
    "Commercial",
]

PropertyCondition = Literal[
    "Excellent",
    "Good",
    "Fair",
    "Poor",
    "Needs Major Repairs",
]

DEFAULT_VACANCY_RATE = 0.05
DEFAULT_WEEKS_PER_MONTH = 4.0


class RoomRental(BaseModel):
    model_config = ConfigDict(frozen=True)

    room_number: int = Field(..., ge=1)
    weekly_rate: float = Field(..., ge=0, description="Rent collected per week for this room")


class EntireHouseIncome(BaseModel):
    """The whole property is let as one unit at a monthly rent."""

    model_config = ConfigDict(frozen=True)

    strategy: Literal["entire-house"] = "entire-house"
    gross_rent: MonthlyAmount = Field(..., ge=0)

    def monthly_gross_rent(self, weeks_per_month: float = DEFAULT_WEEKS_PER_MONTH) -> MonthlyAmount:
        return self.gross_rent


class IndividualRoomsIncome(BaseModel):
    """
    Rooms are let separately at weekly rates.

    An explicit monthly gross_rent always wins over the room-derived figure.
    """

    model_config = ConfigDict(frozen=True)

    strategy: Literal["individual-rooms"] = "individual-rooms"
    rentable_rooms: list[RoomRental] = Field(default_factory=list)
    gross_rent: MonthlyAmount | None = Field(default=None, ge=0)

    @property
    def weekly_room_income(self) -> float:
        return sum(room.weekly_rate for room in self.rentable_rooms)

    def monthly_gross_rent(self, weeks_per_month: float = DEFAULT_WEEKS_PER_MONTH) -> MonthlyAmount:
        if self.gross_rent is not None:
            return self.gross_rent
        return MonthlyAmount(self.weekly_room_income * weeks_per_month)


RentalIncome = Annotated[
    Union[EntireHouseIncome, IndividualRoomsIncome],
    Field(discriminator="strategy"),
]


class OperatingExpenses(BaseModel):
    """
    Recurring costs of running the property, plus the one-off rehab budget.

    Taxes and insurance are yearly bills; everything else is per month.
    """

    model_config = ConfigDict(frozen=True)

    property_taxes: AnnualAmount = Field(default=0.0, ge=0)
    insurance: AnnualAmount = Field(default=0.0, ge=0)
    property_mgmt: MonthlyAmount = Field(default=0.0, ge=0)
    maintenance: MonthlyAmount = Field(default=0.0, ge=0)
    utilities: MonthlyAmount = Field(default=0.0, ge=0)
    hoa_fees: MonthlyAmount = Field(default=0.0, ge=0)
    equipment: MonthlyAmount = Field(default=0.0, ge=0)

    # one-time, counted as cash invested rather than an operating cost
    rehab_costs: float = Field(default=0.0, ge=0)


class PropertyAnalysisInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    # descriptive only; carried through for display
    address: str
    property_type: PropertyType = "Single Family"
    year_built: int | None = None
    condition: PropertyCondition | None = None
    bedrooms: float | None = Field(default=None, ge=0, le=20)
    bathrooms: float | None = Field(default=None, ge=0, le=20)
    square_footage: float | None = Field(default=None, ge=0)
    lot_size: float | None = Field(default=None, ge=0)

    purchase_price: float = Field(..., gt=0)
    current_value: float | None = Field(default=None, ge=0)

    down_payment: float = Field(..., ge=0)
    interest_rate: float = Field(..., ge=0, le=30, description="Annual percent, e.g. 7.5")
    loan_term: int = Field(..., ge=1, le=50, description="Amortization period in years")
    closing_costs: float = Field(default=0.0, ge=0)
    pmi_rate: float = Field(default=0.0, ge=0, le=5, description="Annual percent of the loan")

    income: RentalIncome
    vacancy_rate: float = Field(default=DEFAULT_VACANCY_RATE, ge=0, le=1)

    expenses: OperatingExpenses = Field(default_factory=OperatingExpenses)

    @property
    def loan_amount(self) -> float:
        return max(self.purchase_price - self.down_payment, 0.0)

    @property
    def down_payment_pct(self) -> float:
        if self.purchase_price <= 0:
            return 0.0
        return min(self.down_payment / self.purchase_price, 1.0)
