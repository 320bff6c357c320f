# Services package init
"""
DevCamper Backend — Services Layer
====================================

What:  Adapters for external services, kept out of the route handlers.

Service Inventory:
    - GeocoderService: address → coordinates through a geopy provider
"""
