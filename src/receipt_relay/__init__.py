"""Receipt relay: OCR upload relay and Google Sheets expense logger."""

__version__ = "0.1.0"
