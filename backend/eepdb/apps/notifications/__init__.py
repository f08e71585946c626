"""
Notifications module.

Stores stock and risk alerts until a user resolves them.
"""
