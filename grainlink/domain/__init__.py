"""
This package defines the core domain models for the grainlink library.

It exposes the recipe structure the controller needs to run an automated
brewing session: the mash schedule and the boil additions.
"""
from grainlink.domain.recipe import BoilStep, MashStep, RecipeDetails

__all__ = ["BoilStep", "MashStep", "RecipeDetails"]
