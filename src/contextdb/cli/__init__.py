"""contextdb command-line interface."""
