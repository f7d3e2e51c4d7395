"""Messaging app initialization.

The messaging app enables private 1‑to‑1 conversations between users,
push delivery to connected clients, and the realtime websocket gateway.
"""
