"""
locale-sync: keeps translation dictionaries complete across locales
"""

__version__ = "0.3.0"
