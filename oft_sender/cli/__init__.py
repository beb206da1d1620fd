"""Command line interface for the OFT sender."""
