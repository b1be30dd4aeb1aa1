# Services package init
"""
BagPack Backend: Services Layer
================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive the request's session, apply business rules, and
       return response schemas or raise application exceptions.

Service Inventory:
    - capacity: pure volume / payload / admission functions
    - BagService: bag creation and bag contents
    - CuboidService: cuboid CRUD guarded by the admission check

Services know nothing about HTTP. Status codes come from the exception
handlers in main.py.
"""
