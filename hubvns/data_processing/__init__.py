"""Instance loading and generation."""
