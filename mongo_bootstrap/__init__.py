"""
mongo_bootstrap - one-shot, idempotent MongoDB bootstrap.

Provisions the administrative root credential and a sample namespace
when a fresh MongoDB container starts.
"""

__version__ = "0.1.0"
