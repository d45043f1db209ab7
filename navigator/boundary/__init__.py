"""
Boundary layer.

Adapters for external systems: embedding and chat models, vector databases.
"""
