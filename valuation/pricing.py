"""
Offer calculation
"""
from .models import CalculationResult


def calculate_offer(price: float, percentage: float, exchange_rate: float) -> float:
    """
    Convert a source price into an SGD offer.

    Callers validate inputs: price > 0, 0 < percentage <= 1, exchange_rate > 0.
    """
    return (price * percentage) / exchange_rate


def build_result(price: float, percentage: float, exchange_rate: float) -> CalculationResult:
    """Price one item and keep the parameters used alongside the offer"""
    return CalculationResult(
        price=price,
        percentage=percentage,
        exchange_rate=exchange_rate,
        offer=calculate_offer(price, percentage, exchange_rate)
    )
