"""
findpeople - Terminal user search and connection requests
"""

__version__ = "0.3.0"
