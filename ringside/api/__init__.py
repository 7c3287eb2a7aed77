"""HTTP routers for the roster API."""
