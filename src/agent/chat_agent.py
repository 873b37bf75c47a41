"""Agno agent service for the MateTutor persona with streaming support.

Core module for the tutor's intelligence and conversation handling.

Architecture Decisions:

1. **SQLite Storage** - Agno's Agent has no default persistence. Without explicit
   storage, session_id is ignored and every request is stateless. Each page load
   gets its own session_id, so the stored history lives exactly as long as the
   page's conversation.

2. **Singleton Pattern** - The Agent (model client, storage connection) is shared
   by every page. Only the ConversationSession is created per page load.

3. **Service Wrapper** - Decouples the UI from Agno's interface and turns every
   failure into one ConversationError.

4. **Streaming Generator** - Agno returns run events with metadata. We extract just
   the content string so the orchestrator only sees text chunks.
"""

import logging
import uuid
from collections.abc import AsyncGenerator, Sequence

from agno.agent import Agent
from agno.db.sqlite import SqliteDb
from agno.media import File, Image
from agno.models.google import Gemini

from src.agent.config import TutorConfig, get_tutor_config
from src.agent.prompts import MATE_TUTOR_PROMPT
from src.models.schemas import InlineDataPart, MessagePart, TextPart

logger = logging.getLogger(__name__)

# Agno run event names
_CONTENT_EVENT = "RunContent"
_ERROR_EVENT = "RunError"


class ConversationError(Exception):
    """Raised when the AI service fails to start or finish a reply."""

    pass


class TutorAgentService:
    """Service for managing the Agno tutor agent.

    Wraps Agno's Agent with:
    - Gemini model with the persona as fixed system instructions
    - Persistent SQLite storage for per-session history
    - Clean streaming interface yielding only text
    - Centralized error handling
    """

    def __init__(
        self,
        config: TutorConfig | None = None,
        persona: str = MATE_TUTOR_PROMPT,
    ) -> None:
        """Initialize the agent service.

        Args:
            config: Optional tutor configuration.
                    Loads from environment if not provided.
            persona: System instructions fixed for the agent's lifetime.
        """
        self._config = config or get_tutor_config()
        self._persona = persona
        self._storage = self._create_storage()
        self._agent = self._create_agent()

    @property
    def config(self) -> TutorConfig:
        return self._config

    def _create_storage(self) -> SqliteDb:
        """Create SQLite storage for session history.

        Returns:
            Configured SqliteDb instance.
        """
        self._config.sessions_db.parent.mkdir(parents=True, exist_ok=True)
        return SqliteDb(
            db_file=str(self._config.sessions_db),
            session_table="tutor_sessions",
        )

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Configured Agent with Gemini model and SQLite storage.
        """
        model = Gemini(
            id=self._config.model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
        )

        return Agent(
            model=model,
            db=self._storage,
            instructions=self._persona,
            add_history_to_context=True,
            num_history_runs=self._config.history_runs,
            markdown=False,
        )

    async def stream_parts(
        self,
        parts: Sequence[MessagePart],
        session_id: str,
    ) -> AsyncGenerator[str]:
        """Stream reply chunks for one user turn.

        Args:
            parts: Ordered text and inline data parts of the user message.
            session_id: Session identifier for history tracking.

        Yields:
            Reply text chunks in arrival order.

        Raises:
            ConversationError: If the run fails before or during streaming.
        """
        texts = [part.text for part in parts if isinstance(part, TextPart)]
        inline = [part for part in parts if isinstance(part, InlineDataPart)]
        images = [Image(content=p.data, mime_type=p.mime_type) for p in inline if p.is_image]
        files = [File(content=p.data, mime_type=p.mime_type) for p in inline if not p.is_image]

        try:
            response_stream = self._agent.arun(
                "\n".join(texts),
                session_id=session_id,
                images=images or None,
                files=files or None,
                stream=True,
            )

            async for chunk in response_stream:
                event = getattr(chunk, "event", _CONTENT_EVENT)
                if event == _ERROR_EVENT:
                    raise ConversationError(f"Agent run failed: {chunk.content}")
                if event != _CONTENT_EVENT:
                    continue
                if isinstance(chunk.content, str) and chunk.content:
                    yield chunk.content

        except ConversationError:
            raise
        except Exception as e:
            raise ConversationError(f"Agent run failed: {e}") from e


class ConversationSession:
    """One continuous dialogue with the tutor, created once per page load."""

    def __init__(
        self,
        service: TutorAgentService | None = None,
        session_id: str | None = None,
    ) -> None:
        self._service = service or get_agent_service()
        self.session_id: str = session_id or str(uuid.uuid4())

    async def send(self, parts: Sequence[MessagePart]) -> AsyncGenerator[str]:
        """Send one message and stream the reply.

        The service keeps the history; each call adds one exchange to it.

        Args:
            parts: Ordered parts of the user message.

        Yields:
            Reply text chunks in arrival order.

        Raises:
            ConversationError: On failure at initiation or mid-stream.
        """
        logger.info(f"Sending {len(parts)} part(s) in session {self.session_id[:8]}")
        async for chunk in self._service.stream_parts(parts, self.session_id):
            yield chunk


# Module-level singleton instance
_agent_service: TutorAgentService | None = None


def get_agent_service() -> TutorAgentService:
    """Get or create the global agent service.

    Returns:
        The TutorAgentService instance.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = TutorAgentService()
    return _agent_service
