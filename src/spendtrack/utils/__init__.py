"""Small pure helpers for months and money."""
