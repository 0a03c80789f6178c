# image_scout/__init__.py
"""
ImageScout package initializer.
The command line lives in :mod:`image_scout.cli` (console script ``image_scout``).
"""
__version__ = "0.1.0"
