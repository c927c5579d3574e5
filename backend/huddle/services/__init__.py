"""Services Layer — authentication, channel registry, message ledger.

Invariants:
    - Services depend on repository Protocols, never on the ORM session
    - Services that stamp time take an injectable clock

Design Decisions:
    - One component per file for locality
"""
