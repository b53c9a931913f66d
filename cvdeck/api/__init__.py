"""HTTP API for the CV deck.

Run with:
    uvicorn cvdeck.api.app:create_app --factory
"""
