"""Request-shaping helpers used by the client and the tools."""
