"""
locchannels - facet-driven content channels over Library of Congress searches.
"""

__version__ = '0.1.0'
