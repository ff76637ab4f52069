"""Core utilities shared across trackplan modules."""
