"""Test package for MateTutor.

Unit tests cover isolated logic; integration tests drive whole chat
turns through the orchestrator and the HTTP host.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end turn and API tests

The AI service is replaced by a scripted session; no API key is needed.
Leverages pytest with pytest-check for soft assertions.
"""
