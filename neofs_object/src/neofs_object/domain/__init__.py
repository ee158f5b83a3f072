"""Object model domain: entities, value objects, errors and services."""
