"""HTTP routers for the digest service."""
