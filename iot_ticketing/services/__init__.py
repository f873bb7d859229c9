"""
Services implementing the ticket workflow.
"""
