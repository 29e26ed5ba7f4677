"""Per-model AI citation likelihood estimates."""
