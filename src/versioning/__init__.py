"""Version model, query parsing and definition resolution."""
