"""Storage infrastructure implementations."""
