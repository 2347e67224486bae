"""
Repository layer - Data access abstractions.

This layer provides the power plant repository interface and its
SQLAlchemy and in-memory implementations.
"""
