"""Infrastructure clients shared by the adapters."""
