"""Timor-Leste payroll engine."""

__version__ = "0.1.0"
