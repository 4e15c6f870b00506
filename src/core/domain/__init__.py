"""Domain models and value types.

Pure data structures (Pydantic v2 models and frozen dataclasses). The domain
knows nothing about HTTP, subprocesses or the CLI: only the records each
external source produces.
"""
