"""Reporters for remediation summaries."""

from .stdout import SummaryReporter

__all__ = ["SummaryReporter"]
