"""Ports: contracts between the object model core and its collaborators."""
