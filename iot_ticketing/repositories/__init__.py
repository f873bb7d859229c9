"""
Record stores and repositories for tickets and notifications.
"""
