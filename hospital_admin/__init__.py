"""
Hospital staff administration backend.
"""
