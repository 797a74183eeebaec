"""FastFind command-line interface."""
