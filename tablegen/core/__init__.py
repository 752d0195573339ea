"""Core generation, export and persistence components."""
