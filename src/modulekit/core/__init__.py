"""Core configuration and domain models."""
