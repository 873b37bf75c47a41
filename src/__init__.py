"""MateTutor - a Socratic math tutor chat for exam practice.

Combines NiceGUI for the chat page, Agno with Gemini for the tutor,
latex2mathml for display math and Pydantic for data validation.

Components:
    - agent: Tutor persona, conversation session and streaming
    - rendering: Text escaping and ``$$`` math typesetting
    - ui: Transcript, attachment, theme and turn orchestration
    - api: FastAPI host with health check
    - models: Shared schemas
"""

__version__ = "0.1.0"
