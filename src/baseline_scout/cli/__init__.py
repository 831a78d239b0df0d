"""Baseline Scout command-line interface."""
