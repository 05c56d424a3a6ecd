"""
POS HTTP API
=============
Framework-free handlers; adapters/django_api is the thin Django glue.
"""
