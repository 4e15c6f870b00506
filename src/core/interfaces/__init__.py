"""Core interfaces.

Structural contracts (Protocol) implemented by concrete adapters, so that the
sources depend on abstractions and tests can swap in fakes.
"""
