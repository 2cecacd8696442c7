# Routes package init
"""
PhotoStash Backend - API Routes Package
=========================================

Route Inventory:
    - photos.py:  GET    /photos
                  GET    /photo/{id}
                  POST   /photo
                  PUT    /photo/{id}
                  DELETE /photo/{id}
    - images.py:  GET    /image/{name}
    - health.py:  GET    /health

Routes stay thin: parse the request, call PhotoService or ImageStore,
return the schema. Business logic lives in app.services.
"""
