"""Logging, exceptions and configuration validation."""
