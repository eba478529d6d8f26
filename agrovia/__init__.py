"""Produce supply chain tracking: freshness, grading, pricing and retail."""

__version__ = "0.1.0"
