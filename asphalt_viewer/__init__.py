"""PyQt5 station measurement editor."""
