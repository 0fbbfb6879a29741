"""
API server package — HTTP interface for a presentation layer.

Exposes the store's read-only observables (account, click state, computed
points, ranked leaderboard, config) and the one imperative action, click.
"""
