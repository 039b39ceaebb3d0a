"""Adapters connecting the patch domain to stores and files."""
