"""HTTP routers for the fishing log service."""
