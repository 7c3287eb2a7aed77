"""Business operations behind the HTTP API."""
