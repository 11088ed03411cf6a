"""
Core module for signalstream: exact-decimal numerics, errors and logging
"""
