"""Core contracts (Protocol) implemented by adapters."""
