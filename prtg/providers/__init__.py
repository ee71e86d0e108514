"""Content provider drivers."""
