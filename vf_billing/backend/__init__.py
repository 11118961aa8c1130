"""
Billing backend
"""
