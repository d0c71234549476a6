"""Installation of resolved library definitions."""
