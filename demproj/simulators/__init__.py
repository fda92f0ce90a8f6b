"""Contain the simulators for the demand projection.

The module is splitted in different submodules: the base simulators
(period stepping, logging, region), the demand models computing the
calibrated demand, the demand sectors and their subsectors.
"""
from __future__ import annotations
