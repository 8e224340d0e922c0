"""Wire types (pydantic) and domain types (dataclasses) for Thumbsmith."""
