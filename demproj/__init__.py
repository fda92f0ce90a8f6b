"""Demand projection of energy services for integrated assessment models.

The package computes the energy service demand of the sectors of a
region, period by period, from GDP, population and prices.
"""
from __future__ import annotations

__version__ = '0.1.0'
