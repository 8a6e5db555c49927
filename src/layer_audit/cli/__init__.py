"""Command-line interface for layer-audit."""
