"""
Core utilities — shared exceptions and cross-cutting concerns used by the
clients, the points core and the store.
"""
