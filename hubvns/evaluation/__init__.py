"""Metrics, validation and result export."""
