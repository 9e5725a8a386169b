"""
Directional traffic distribution analysis over rotated capture files
"""

__version__ = "1.0.0"
