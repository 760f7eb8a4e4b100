"""Domain layer: schema, search and saved-query value objects."""
