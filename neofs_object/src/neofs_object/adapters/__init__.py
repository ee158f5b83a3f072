"""Adapters implementing the object model ports."""
