"""Typed response models for GraphQL client queries."""

__version__ = "0.1.0"
