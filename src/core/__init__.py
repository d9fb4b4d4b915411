"""Core domain package for schemadeck.

Core contains the draft store, confirmation gate, and apply workflow without
any HTTP or terminal UI code, keeping the workflow testable in isolation.
"""
