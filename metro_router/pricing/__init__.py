"""Fare pricing for single journeys, card journeys and day passes."""

from .fare_calculator import FareCalculator, FareSchedule

__all__ = ["FareCalculator", "FareSchedule"]
