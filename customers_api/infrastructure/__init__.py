"""Infrastructure Layer — database access, the SQLAlchemy customer store and logging.

Invariants:
    - Infrastructure implements core protocols; core never imports from here
    - All SQLAlchemy failures are mapped to core error types before leaving this layer

Design Decisions:
    - Store receives its session manager by injection; nothing here is a global
"""
