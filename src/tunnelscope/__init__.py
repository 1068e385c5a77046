"""Tunnelscope: DNS tunneling detection front-end.

Normalizes loosely-structured DNS query logs into a canonical record and
scores each query for covert-channel behavior.
"""

__version__ = "0.1.0"
