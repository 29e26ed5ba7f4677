"""Page analysis engine: extraction, scoring, citation estimates and revision."""
