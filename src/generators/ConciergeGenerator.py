"""Concierge text generation module."""

import asyncio
import json
import logging
from typing import Any, List, Optional

from langchain_core.prompts import ChatPromptTemplate

from config import CONCIERGE_TIMEOUT_SECONDS
from core.exceptions import UpstreamUnavailableError
from schemas.concierge import CandidateProfile

logger = logging.getLogger(__name__)


class ConciergeGenerator:
    """Ask a chat model to narrate a team for a goal from a fixed roster."""

    def __init__(
        self,
        llm: Optional[Any],
        timeout: float = CONCIERGE_TIMEOUT_SECONDS,
    ):
        """Initialize ConciergeGenerator.

        Args:
            llm: Chat model exposing ``ainvoke``. None means the provider is
                not configured and every call reports unavailability.
            timeout: Seconds to wait for the model before giving up.
        """
        self.llm = llm
        self.timeout = timeout
        self.prompt = ChatPromptTemplate.from_messages(
            [
                (
                    "system",
                    "You are an AI team-building concierge for a hackathon platform. "
                    "You only ever match people from the roster you are given; "
                    "never invent anyone.",
                ),
                (
                    "user",
                    "A user has given you this goal:\n"
                    "\"{goal}\"\n\n"
                    "Available students (ONLY match from this exact list, do NOT invent anyone):\n"
                    "{roster}\n\n"
                    "Based on the goal, pick the best 3-5 students. If fewer than 3 exist, "
                    "match all of them.\n"
                    "Respond ONLY with valid JSON, no markdown fences, no extra text:\n"
                    "{{\n"
                    "  \"summary\": \"one sentence summary of the goal\",\n"
                    "  \"reasoning\": \"your overall matching approach\",\n"
                    "  \"matches\": [\n"
                    "    {{\n"
                    "      \"studentId\": \"<exact id from list>\",\n"
                    "      \"studentName\": \"<exact name from list>\",\n"
                    "      \"role\": \"suggested role title\",\n"
                    "      \"matchReason\": \"1-2 sentences why they fit\",\n"
                    "      \"introMessage\": \"friendly message to send them\",\n"
                    "      \"matchScore\": <integer 0-100>\n"
                    "    }}\n"
                    "  ],\n"
                    "  \"roleBreakdown\": [\n"
                    "    {{ \"role\": \"role title\", \"person\": \"name\", "
                    "\"responsibility\": \"what they own\" }}\n"
                    "  ],\n"
                    "  \"nextSteps\": [\"step 1\", \"step 2\", \"step 3\"]\n"
                    "}}",
                ),
            ]
        )

    async def generate(self, goal: str, roster: List[CandidateProfile]) -> str:
        """Return the model's raw text for the goal and roster.

        Raises:
            UpstreamUnavailableError: If there is no model, the call times
                out, or the provider errors.
        """
        if self.llm is None:
            raise UpstreamUnavailableError("No text-generation provider configured")

        messages = self.prompt.format_messages(
            goal=goal,
            roster=json.dumps([c.model_dump() for c in roster], indent=2),
        )
        logger.info("Requesting concierge plan for %d candidate(s)", len(roster))
        try:
            response = await asyncio.wait_for(
                self.llm.ainvoke(messages), timeout=self.timeout
            )
        except asyncio.TimeoutError as exc:
            raise UpstreamUnavailableError(
                f"Provider did not answer within {self.timeout}s"
            ) from exc
        except Exception as exc:
            raise UpstreamUnavailableError(f"Provider call failed: {exc}") from exc

        # LangChain returns an AIMessage; plain strings are accepted too
        content = response.content if hasattr(response, "content") else response
        return _content_text(content)


def _content_text(content: Any) -> Any:
    """Flatten a list of content blocks into their text.

    Anything that is neither a string nor a block list is returned as is and
    left for the parser to reject.
    """
    if not isinstance(content, list):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)
