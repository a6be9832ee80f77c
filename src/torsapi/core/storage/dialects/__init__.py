"""
Database dialect configurations
"""
