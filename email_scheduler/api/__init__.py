"""
HTTP API for scheduling emails.
"""
