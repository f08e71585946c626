"""
Inventory module.

Parts, their stock ledger, and the threshold tiers derived from stock levels.
"""
