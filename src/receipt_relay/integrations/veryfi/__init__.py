"""Veryfi-style receipt OCR relay."""
