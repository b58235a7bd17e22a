"""Cloud provider product, price, region and instance type information."""

__version__ = "0.1.0"