"""Services Layer — orchestration of core rules around store IO.

Invariants:
    - Services depend on core protocols, never on concrete stores
    - Services raise core error types; HTTP mapping happens in api/

Design Decisions:
    - Constructor injection of the store: wiring happens once in main.create_app
"""
