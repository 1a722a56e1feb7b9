"""Bearer-token authenticated object service."""
