"""
Abstract interfaces for the IoT ticketing system.

These interfaces define the contracts that concrete implementations
must adhere to, following the Dependency Inversion Principle.

This package contains:
- Provider interfaces for external service adapters
- Repository interfaces for record storage
- Service interfaces for the ticket workflow
"""
