"""Core of reckon: error types, configuration, and the expression language."""
