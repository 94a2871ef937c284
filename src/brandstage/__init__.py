"""brandstage - authorization and invitation core for multi-tenant brand/event management."""

__version__ = "0.1.0"
