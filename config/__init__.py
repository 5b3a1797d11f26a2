"""
Process configuration for the Valuation Bot
"""
