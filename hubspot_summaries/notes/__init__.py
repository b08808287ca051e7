"""Summary note codec, filtering, candidate resolution and merge policy."""
