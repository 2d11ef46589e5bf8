"""
Ambient support: logging and configuration.
"""
