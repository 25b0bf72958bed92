"""Code generator for Base framework modules."""

__version__ = "0.1.0"
