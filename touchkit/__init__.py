"""Resistive touch panel handling: orientation, calibration, hold acceleration and touch state tracking."""

__version__ = "0.1.0"
__all__ = ["touch"]