"""Fixed-ladder validation and structural calculation engine."""
