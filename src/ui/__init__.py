"""NiceGUI interface - the single chat page and the state behind it.

Responsibilities:
    - Chat transcript with streamed, math-aware tutor replies
    - One pending file attachment with preview and removal
    - Turn orchestration with a loading indicator and failure message
    - Dark/light theme support with a remembered preference

Page wiring lives in chat_page; everything else runs without a browser.
"""
