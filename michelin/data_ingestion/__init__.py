"""
Dataset seeding for the Michelin restaurant query service.

Responsibilities:
- Read a raw Michelin guide export (JSON or CSV).
- Normalize it into the canonical Restaurant schema (id, name, cuisine tags,
  location tags, pass-through extras).
- Persist the processed dataset that the record store loads at startup.
"""
