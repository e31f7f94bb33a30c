# Routes package init
"""
Product Catalog Backend — API Routes Package
==============================================

Route Inventory:
    - products.py:  POST/GET /products, GET/PUT/DELETE /products/{id}
    - health.py:    GET /health

Routes stay thin: parse the request, call ProductRepository, pick the
status code. Error responses are produced by catalog.errors.
"""
