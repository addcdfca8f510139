"""Application layer: services orchestrating the security engine."""
