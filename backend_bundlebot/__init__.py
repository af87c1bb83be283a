"""
Backend BundleBot — Discord front end for batched Solana SOL transfers.

Users assemble a bundle of up to five transfers with slash commands, then
open a signing page where their own wallet signs everything. The backend
validates input, keeps bundles, sessions and history in JSON stores, serves
the signing page, and proxies read-only status queries to Solana RPC.
"""

__version__ = "0.1.0"
