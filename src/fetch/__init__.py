"""Remote index retrieval.

This module downloads the raw platform index over HTTP.
It hands complete response bodies to the normalization transform.
"""
