# Routes package init
"""
BagPack Backend: API Routes Package
====================================

Route Inventory:
    - cuboids.py: GET    /cuboids?ids=...     (list with bags)
                  GET    /cuboids/{id}        ({id, volume})
                  POST   /cuboids             (create, capacity checked)
                  PUT    /cuboids/{id}        (update, capacity checked)
                  PATCH  /cuboids/{id}        (same as PUT)
                  DELETE /cuboids/{id}
    - bags.py:    POST   /bags
                  GET    /bags/{id}           (contents and capacity figures)
    - health.py:  GET    /health

Routes stay thin: extract request data, call a service, return its result.
"""
