"""Toolkit-free domain code for station measurements and material tonnage."""
