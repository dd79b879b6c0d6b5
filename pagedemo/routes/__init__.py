# Routes package init
"""
pagedemo — Routes Package
==========================

Route Inventory:
    - pages.py:   ANY /index, ANY /login   (render fixed views)
    - health.py:  GET /health              (service health check)

Routes stay thin: page handlers only pick a view identifier, and the
view resolver does the rendering.
"""
