"""Command line tools for jsminifier."""
