"""Nearest neighbour searches over event images."""
