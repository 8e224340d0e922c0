"""Request orchestration for thumbnail generation."""
