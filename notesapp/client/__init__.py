"""
Client Layer.

Everything the front ends share: the HTTP gateway to the backend.
"""
