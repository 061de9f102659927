"""
Module for turning timestamped transcripts into structured study notes using LLM models.
"""

import os
from typing import Any, Dict, List, Optional

import groq
from langchain.chat_models import init_chat_model
from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field, ValidationError

from app.config import config
from app.core.formatter import chunk_text
from app.core.prompts import (
    CHUNK_TOOL,
    NOTES_TOOL,
    chunk_system_template,
    chunk_user_template,
    notes_system_suffix,
    notes_user_template,
    type_prompts,
)
from app.models.schemas import ChunkSummary, PipelineSettings, TranscriptChunk, VideoInfo, VideoType
from app.utils.error_handling import (
    AINotConfiguredError,
    EmptyResponseError,
    GenerationError,
    NotesParseError,
    PaymentRequiredError,
    RateLimitError,
)
from app.utils.helpers import truncate_text
from app.utils.json_parsing import parse_lenient_json
from app.utils.logger import logging


class SynthesisResult(BaseModel):
    """Raw notes object plus how it was produced."""
    notes: Dict[str, Any]
    mode: str
    chunk_count: int = 0
    generator_calls: int = 1
    chunk_summaries: List[ChunkSummary] = Field(default_factory=list)


def message_text(message: BaseMessage) -> str:
    """Flatten message content, which may be a string or a list of content blocks."""
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def extract_payload(message: BaseMessage) -> Dict[str, Any]:
    """
    Pull the structured object out of a model reply.

    Preference order: parsed tool call arguments, raw arguments of a tool call
    the client could not parse, then the message text.

    Raises:
        EmptyResponseError: if the reply carries nothing at all
        NotesParseError: if no JSON object can be recovered
    """
    for call in getattr(message, "tool_calls", None) or []:
        args = call.get("args")
        if isinstance(args, dict) and args:
            return args

    candidates = []
    for call in getattr(message, "invalid_tool_calls", None) or []:
        args = call.get("args")
        if isinstance(args, str) and args.strip():
            candidates.append(args)

    text = message_text(message)
    if text.strip():
        candidates.append(text)

    if not candidates:
        raise EmptyResponseError()

    for candidate in candidates:
        try:
            return parse_lenient_json(candidate)
        except ValueError:
            continue

    preview = truncate_text(candidates[-1], 500)
    logging.error(f"Unparseable model reply: {preview}")
    raise NotesParseError(debug={"rawPreview": preview})


def classify_generation_error(e: Exception) -> GenerationError:
    """Map a client exception to the matching generation error."""
    status = getattr(e, "status_code", None)
    if status == 429:
        return RateLimitError(status_code=status)
    if status == 402:
        return PaymentRequiredError(status_code=status)
    if status is not None:
        return GenerationError(f"AI gateway error: HTTP {status}", status_code=status)
    return GenerationError(f"AI gateway error: {e}")


class NoteSummarizer:
    """Class to handle note synthesis operations."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 settings: Optional[PipelineSettings] = None):
        """
        Initialize the synthesizer with API key.

        Args:
            api_key: Groq API key (if None, will try to get from environment)
            model: Chat model name (defaults to NOTES_MODEL)
            settings: Chunking policy

        Raises:
            AINotConfiguredError: if no API key is available
        """
        self.api_key = api_key or os.getenv("GROQ_API_KEY") or config.GROQ_API_KEY
        if not self.api_key:
            raise AINotConfiguredError()

        os.environ["GROQ_API_KEY"] = self.api_key
        self.model = model or config.NOTES_MODEL
        self.settings = settings or PipelineSettings()
        self.calls = 0

        self.llm = init_chat_model(
            model=self.model,
            model_provider=config.NOTES_MODEL_PROVIDER,
            temperature=config.NOTES_TEMPERATURE,
            max_tokens=config.NOTES_MAX_TOKENS,
            timeout=config.GENERATION_TIMEOUT,
            max_retries=0,
        )

    def _invoke(self, messages: List[BaseMessage], tool: Dict[str, Any]) -> Dict[str, Any]:
        """Run one forced tool call and return the recovered arguments."""
        llm = self.llm.bind_tools([tool], tool_choice=tool["function"]["name"])
        self.calls += 1
        try:
            response = llm.invoke(messages)
        except groq.APIError as e:
            raise self._generation_error(e) from e
        except Exception as e:
            # Other providers' SDK errors expose the HTTP status the same way
            if getattr(e, "status_code", None) is None:
                raise
            raise self._generation_error(e) from e
        return extract_payload(response)

    @staticmethod
    def _generation_error(e: Exception) -> GenerationError:
        error = classify_generation_error(e)
        logging.error(f"Generation call failed: {error.message}")
        return error

    def summarize_chunk(self, chunk: TranscriptChunk, video_info: VideoInfo) -> ChunkSummary:
        """
        Summarize a single chunk of a long transcript.

        Args:
            chunk: The chunk to summarize
            video_info: Video metadata for context

        Returns:
            ChunkSummary for the chunk
        """
        prompt = ChatPromptTemplate.from_messages([
            ("system", chunk_system_template),
            ("user", chunk_user_template),
        ])
        messages = prompt.format_messages(
            index=chunk.index + 1,
            total=chunk.total,
            title=video_info.title,
            content=chunk.text,
        )
        payload = self._invoke(messages, CHUNK_TOOL)
        try:
            return ChunkSummary.model_validate(payload)
        except ValidationError as e:
            raise NotesParseError(f"Failed to parse summary of part {chunk.index + 1}") from e

    def _notes_messages(self, video_info: VideoInfo, video_type: VideoType, duration: str,
                        content_label: str, content: str) -> List[BaseMessage]:
        prompt = ChatPromptTemplate.from_messages([
            ("system", type_prompts[video_type] + "\n" + notes_system_suffix),
            ("user", notes_user_template),
        ])
        return prompt.format_messages(
            title=video_info.title,
            video_type=video_type.value,
            duration=duration,
            content_label=content_label,
            content=content,
        )

    def create_notes(self, transcript_text: str, video_info: VideoInfo,
                     video_type: VideoType = VideoType.GENERAL, duration: str = "Unknown") -> SynthesisResult:
        """
        Create notes for a transcript.

        Short transcripts go to the model in one call. Longer ones are split,
        each chunk is summarized in order, and a final call builds the notes
        from the chunk summaries.

        Args:
            transcript_text: Timestamped transcript text
            video_info: Video metadata for context
            video_type: Category that shapes the notes
            duration: Formatted duration

        Returns:
            SynthesisResult with the raw notes object
        """
        self.calls = 0

        if len(transcript_text) <= self.settings.direct_mode_max_chars:
            logging.info(f"Synthesizing notes directly from {len(transcript_text)} chars")
            messages = self._notes_messages(video_info, video_type, duration, "TRANSCRIPT", transcript_text)
            notes = self._invoke(messages, NOTES_TOOL)
            return SynthesisResult(notes=notes, mode="direct", generator_calls=self.calls)

        chunks = chunk_text(transcript_text, self.settings.chunk_size, self.settings.max_chunks)
        logging.info(f"Synthesizing notes from {len(chunks)} chunks of {len(transcript_text)} chars")

        summaries = []
        for chunk in chunks:
            summaries.append(self.summarize_chunk(chunk, video_info))
            logging.debug(f"Summarized part {chunk.index + 1}/{chunk.total}")

        combined = "\n\n".join(
            self._format_chunk_summary(index, len(summaries), summary)
            for index, summary in enumerate(summaries)
        )
        messages = self._notes_messages(video_info, video_type, duration, "SUMMARIES OF CONSECUTIVE PARTS", combined)
        notes = self._invoke(messages, NOTES_TOOL)

        return SynthesisResult(
            notes=notes,
            mode="chunked",
            chunk_count=len(chunks),
            generator_calls=self.calls,
            chunk_summaries=summaries,
        )

    @staticmethod
    def _format_chunk_summary(index: int, total: int, summary: ChunkSummary) -> str:
        lines = [f"Part {index + 1} of {total}:", summary.chunk_summary.strip()]
        lines.extend(f"- {point}" for point in summary.chunk_key_points)
        return "\n".join(lines)
