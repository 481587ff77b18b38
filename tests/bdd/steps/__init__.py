"""Step definitions for BDD scenarios."""
