"""Use cases orchestrating emission and shutdown."""
