"""
SEO Scout package initializer.
Defines the package version; the CLI lives in :mod:`seo_scout.cli`.
"""
__version__ = "0.1.0"
