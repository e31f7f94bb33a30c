# Services package init
"""
Product Catalog Backend — Services Layer
==========================================

What:  Store access sitting between routes (HTTP) and the database.

Service Inventory:
    - ProductRepository: create / list / get / update / delete for products
"""
