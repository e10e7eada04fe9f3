"""Core logic for indicator computation and signal synthesis.

This package contains pure business logic with no I/O dependencies
(no network, scheduling, or credential access). The app package wires
it to the exchange and the alert channel.
"""
