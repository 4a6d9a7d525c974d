"""HTTP API for the TL payroll engine."""
