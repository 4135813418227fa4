# tests/conftest.py
import pytest

from propvest.domain.assumptions import ProjectionAssumptions
from propvest.domain.property import (
    EntireHouseIncome,
    OperatingExpenses,
    PropertyAnalysisInput,
)


def make_input(**overrides) -> PropertyAnalysisInput:
    """A plain single-family rental; override any top-level field."""
    fields = dict(
        address="123 Main St, Columbus OH",
        property_type="Single Family",
        purchase_price=300_000.0,
        down_payment=60_000.0,
        interest_rate=7.5,
        loan_term=30,
        closing_costs=6_000.0,
        pmi_rate=0.0,
        income=EntireHouseIncome(gross_rent=2_800.0),
        vacancy_rate=0.05,
        expenses=OperatingExpenses(
            property_taxes=3_600.0,
            insurance=1_200.0,
            property_mgmt=200.0,
            maintenance=150.0,
        ),
    )
    fields.update(overrides)
    return PropertyAnalysisInput(**fields)


@pytest.fixture
def base_input() -> PropertyAnalysisInput:
    return make_input()


@pytest.fixture
def assumptions() -> ProjectionAssumptions:
    return ProjectionAssumptions()


@pytest.fixture
def base_payload() -> dict:
    # camelCase, the shape the web form posts
    return {
        "address": "456 Elm St, Dayton OH",
        "propertyType": "Duplex",
        "purchasePrice": 250000,
        "downPayment": 50000,
        "interestRate": 6.5,
        "loanTerm": 30,
        "closingCosts": 5000,
        "grossRent": 2400,
        "vacancyRate": 0.05,
        "propertyTaxes": 3000,
        "insurance": 1200,
        "propertyMgmt": 150,
        "maintenance": 100,
    }
