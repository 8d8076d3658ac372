"""Servers — local catalog of MCP server endpoints.

The server registry provides:
- Cataloging: named endpoint records keyed by a unique id
- Validation: a closed set of server types with per-type checks
- Persistence: a JSON snapshot rewritten on every mutation
"""
