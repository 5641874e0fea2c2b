"""
User Profile Access Layer - Profiles service.
"""
