"""printzone - keeps overlay design elements inside a product's printable region."""

__version__ = "0.1.0"
