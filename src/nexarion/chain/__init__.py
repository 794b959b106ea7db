"""
Chain - On-chain read layer for Nexarion.

Provides the async JSON-RPC client and ABI handling used to query the
Pi Network contract.

Uses httpx + eth-abi instead of the heavyweight web3.py.
"""
