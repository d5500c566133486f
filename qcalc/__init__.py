"""qcalc -- Qantas points and status credits earned per flight segment."""

__version__ = "0.1.0"
