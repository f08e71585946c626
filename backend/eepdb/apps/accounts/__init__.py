"""
Accounts module.

Users of the inventory portal and the login/registration flow that issues
their access tokens.
"""
