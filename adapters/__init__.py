"""
Adapters — thin wrappers over the monday.com GraphQL API.

Each adapter runs one GraphQL operation and turns the response into the
dataclasses in models.py. No business decisions happen here.
"""
