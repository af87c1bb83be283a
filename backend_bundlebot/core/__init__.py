"""
Core utilities — exceptions and cross-cutting concerns shared by the bot,
the web endpoint and the stores.
"""
