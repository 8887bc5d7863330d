"""Bundled JSON Schemas for policy configuration files, one directory per format version."""
