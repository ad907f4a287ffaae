"""QR Docs: storage desk for deposited documents and items."""

__version__ = "1.0.0"
