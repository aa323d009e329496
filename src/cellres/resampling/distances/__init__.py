"""Distance metrics between events."""
