"""Problem instance and solution models."""
