"""Command line maintenance tasks (``python -m ringside.scripts.<name>``)."""
