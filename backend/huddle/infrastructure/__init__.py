"""Infrastructure Layer — persistence, hashing, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - Repositories implement the Protocols in core/repository_protocols.py
    - All SQLAlchemy failures surface as DatabaseError

Design Decisions:
    - One repository per aggregate (users, channels, messages)
"""
