"""
Package initializer for the freelance marketplace backend.

Holds the Django settings, the ASGI application that serves both the
REST API and the realtime messaging gateway, and the project-level
URL and websocket routing.
"""
