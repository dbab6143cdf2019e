"""Abstract contracts consumed by the core layer."""
