"""
POS Console Adapter
====================
Interactive menu, input validation and the techstore-pos entry point.
"""
