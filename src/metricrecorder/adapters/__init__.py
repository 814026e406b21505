"""Adapters connecting metricrecorder to the standard library."""
