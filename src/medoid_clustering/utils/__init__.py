"""Logging and run bookkeeping helpers."""
