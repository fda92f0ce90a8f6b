"""Utilities for the model time, inputs and outputs of the sectors."""
