"""
Adapters for external services used by the IoT ticketing system.
"""
