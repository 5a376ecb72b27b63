"""Output layer - render ServiceResult for humans (Rich) or machines (JSON)."""
