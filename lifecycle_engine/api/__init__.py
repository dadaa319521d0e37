"""
API Package.

HTTP and JSON-RPC access to the lifecycle tools.
"""
