"""
Configuration package. All values live in config/settings.py.
"""
