"""Constant definitions shared across Codeproof modules."""
