"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - agent/: Configuration and Agno streaming wrapper
    - rendering/: Escaping and display math typesetting
    - ui/: Transcript, attachments and theme logic

Uses mocks for external services when needed. Leverages pytest-check
for multiple assertions per test.
"""
