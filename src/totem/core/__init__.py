"""Configuration, exceptions, protocols and logging shared across Totem."""
