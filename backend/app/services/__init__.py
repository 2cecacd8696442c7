# Services package init
"""
PhotoStash Backend - Services Layer
=====================================

Service Inventory:
    - PhotoStore:   parameter-bound row operations on the photos table
    - ImageStore:   upload persistence and removal in the image directory
    - PhotoService: the per-route flows combining both stores
"""
