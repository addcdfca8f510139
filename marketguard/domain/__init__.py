"""Domain layer: entities, value objects, enums, errors and protocols (ports)."""
