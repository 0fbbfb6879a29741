"""
Backend Points — points accrual and reconciliation engine for Solana wallets.

Keeps a locally extrapolated estimate of a wallet's reward balance between
authoritative server snapshots, paced to the chain's slot cadence, and manages
the rate-limited click claim. Modular layout: slot clock, REST/RPC clients,
points core (syncer, simulator, click claim, ranker), state store, API server.
"""

__version__ = "0.1.0"
