from .calculator import calculate_premium

__all__ = ["calculate_premium"]
