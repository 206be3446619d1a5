"""Command line interface for Codeproof."""
