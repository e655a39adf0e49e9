"""Core business logic for the document catalog."""
