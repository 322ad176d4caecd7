"""Code 128 font encoding for purchase document barcodes."""

__version__ = "0.1.0"
