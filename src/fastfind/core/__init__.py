"""Core domain logic: geo filtering, city registry and models."""
