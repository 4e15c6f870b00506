"""Adapters: concrete implementations that talk to processes and HTTP APIs."""
