"""
Core package - Shared base classes and text utilities.
"""
