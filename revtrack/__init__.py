"""revtrack command-line application."""
