"""Registry HTTP clients."""
