"""Cache persistence and build lifecycle.

This module writes the normalized platform document to its cache path
and decides when build lifecycle events refresh it.
"""
