"""Crop, soil and site state with daily evaporation, water balance and nutrient steps, plus parameter-file reading and result formatting."""

__version__ = "0.1.0"