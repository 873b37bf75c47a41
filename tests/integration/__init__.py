"""Integration tests for complete chat turns and the HTTP host.

Turns run through the real orchestrator, transcript, renderer and
attachment manager with a scripted conversation session.
"""
