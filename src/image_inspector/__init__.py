# ABOUTME: Image Inspector - audits document store content for broken image sets
# ABOUTME: Package root exposing the version

__version__ = "0.1.0"
