"""TirTimer: a two-stage preparation / shooting timer."""

__version__ = "0.1.0"
