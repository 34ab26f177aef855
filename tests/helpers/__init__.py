"""
Test helpers for mecene.

Modules:
- fakes: In-memory store and sent transaction fakes
"""
