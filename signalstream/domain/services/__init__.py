"""
Domain Services - Pure Indicator Logic
======================================
Streaming computations without I/O.
"""
