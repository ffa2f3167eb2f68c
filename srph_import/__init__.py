"""CSV import tool for the SRPH-MIS asset management system."""

__version__ = "0.1.0"
