"""Host integrations for piece tables."""
