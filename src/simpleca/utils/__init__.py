"""Helpers for PEM/DER framing, naming rules and filesystem writes."""
