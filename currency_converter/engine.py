"""Pure conversion arithmetic."""
import math

from currency_converter.utils.errors import ComputationError


def exchange_rate(base_rate: float, target_rate: float) -> float:
    """Rate from base to target, given both quoted against a common currency."""
    if base_rate is None or not math.isfinite(base_rate) or base_rate <= 0:
        raise ComputationError(f"Invalid base rate: {base_rate}")
    if target_rate is None or not math.isfinite(target_rate):
        raise ComputationError(f"Invalid target rate: {target_rate}")
    rate = target_rate / base_rate
    if not math.isfinite(rate):
        raise ComputationError(f"Rate {target_rate}/{base_rate} is out of range")
    return rate


def apply_rate(amount: float, rate: float) -> float:
    """Multiply ``amount`` by ``rate``; the product must stay finite."""
    converted = amount * rate
    if not math.isfinite(converted):
        raise ComputationError(f"Converted amount out of range: {amount} * {rate}")
    return converted


def convert(amount: float, base_rate: float, target_rate: float) -> float:
    """Convert ``amount`` using ``amount * (target_rate / base_rate)``."""
    return apply_rate(amount, exchange_rate(base_rate, target_rate))
