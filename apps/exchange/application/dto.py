"""
Conversion request and result objects passed between the API and the engine.
Amounts and rates stay Decimal until to_dict() renders them as strings.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class ConversionRequestDTO:
    """Request DTO for currency conversion."""
    source_currency: str
    exchanged_currency: str
    amount: Decimal


@dataclass
class ConversionResultDTO:
    """Result DTO for currency conversion."""
    source_currency: str
    exchanged_currency: str
    amount: Decimal
    rate: Decimal
    converted_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "source_currency": self.source_currency,
            "exchanged_currency": self.exchanged_currency,
            "amount": str(self.amount),
            "rate": str(self.rate),
            "converted_amount": str(self.converted_amount),
        }
