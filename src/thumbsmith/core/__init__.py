"""Pure request-gating logic: errors, identity, validation, origin, prompts."""
