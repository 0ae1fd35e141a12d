"""Service report generation for field-service tickets."""

__version__ = "0.1.0"
