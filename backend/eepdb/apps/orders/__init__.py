"""
Orders module.

Part orders and the lifecycle that couples their status to the stock ledger.
"""
