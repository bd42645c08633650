"""Core domain: levels, events, fields and ports."""
