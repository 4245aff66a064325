"""Integrations with external OCR and Google services."""
