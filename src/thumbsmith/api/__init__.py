"""HTTP layer for Thumbsmith.

- Translates requests into gateway calls
- Converts GatewayError into structured JSON responses
- Holds no gating logic of its own
"""
