"""Domain layer: ports, value objects and exceptions."""
