"""Gemini-backed enrichment gateway.

Every operation sends a system instruction plus user content and gets free
text back. Structured results are pulled out of that text by a typed parse
step (`Parsed` / `Unparseable`); each operation decides explicitly what an
unparseable reply means for it. Any failure surfaces as `EnrichmentError`.
"""

import asyncio
import json
import logging
import re
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Union

from google import genai
from google.genai import types

from learnhub.config import GEMINI_API_KEY, GEMINI_MODEL, GEMINI_TIMEOUT_SECONDS
from learnhub.errors import EnrichmentError
from learnhub.services import prompts

logger = logging.getLogger(__name__)

MAX_FALLBACK_QUESTIONS = 10


@dataclass(frozen=True)
class Parsed:
    document: Any


@dataclass(frozen=True)
class Unparseable:
    raw_text: str


ParseResult = Union[Parsed, Unparseable]


def _extract_json(text: str, opener: str, closer: str, expected: type) -> ParseResult:
    if not isinstance(text, str):
        return Unparseable(str(text))
    start = text.find(opener)
    end = text.rfind(closer)
    if start < 0 or end <= start:
        return Unparseable(text)
    try:
        document = json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        return Unparseable(text)
    if not isinstance(document, expected):
        return Unparseable(text)
    return Parsed(document)


def parse_json_object(text: str) -> ParseResult:
    """Extract the JSON object spanning the first '{' to the last '}'."""
    return _extract_json(text, "{", "}", dict)


def parse_json_array(text: str) -> ParseResult:
    """Extract the JSON array spanning the first '[' to the last ']'."""
    return _extract_json(text, "[", "]", list)


def extract_sections(text: str) -> dict:
    """Keyword-based recovery of a structured idea from prose.

    A section is the first line mentioning one of its keywords plus the two
    lines after it. Sections with no matching line are left empty.
    """
    lines = text.split("\n")
    sections = {}
    for key, keywords in prompts.STRUCTURE_SECTIONS.items():
        sections[key] = ""
        for i, line in enumerate(lines):
            lowered = line.lower()
            if any(keyword in lowered for keyword in keywords):
                sections[key] = " ".join(lines[i : i + 3]).strip()
                break
    return sections


SLIDE_HEADING = re.compile(r"(?m)^\s*\d+\.\s")


def split_slides(text: str) -> list[dict]:
    """Split a numbered outline ("1. Title" at line start) into slide dicts."""
    sections = SLIDE_HEADING.split(text)
    if len(sections) > 1:
        sections = sections[1:]  # text before the first heading is preamble
    slides = []
    for section in sections:
        section = section.strip()
        if not section:
            continue
        number = len(slides) + 1
        lines = section.split("\n")
        slides.append(
            {
                "slide_number": number,
                "title": lines[0].strip() or f"Slide {number}",
                "content": "\n".join(lines[1:]).strip(),
                "notes": "",
            }
        )
    return slides


def extract_questions(text: str) -> list[dict]:
    """Pick question-looking lines out of prose, capped at ten."""
    questions = []
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped and ("?" in stripped or re.match(r"^\d+\.", stripped)):
            questions.append(
                {
                    "question_text": re.sub(r"^\d+\.\s*", "", stripped),
                    "question_type": "general",
                    "difficulty": "medium",
                    "expected_keywords": [],
                }
            )
    return questions[:MAX_FALLBACK_QUESTIONS]


def assign_question_ids(questions: list) -> list[dict]:
    normalized = []
    for index, question in enumerate(questions, start=1):
        if isinstance(question, str):
            question = {"question_text": question}
        elif not isinstance(question, dict):
            continue
        question = dict(question)
        question["id"] = str(question.get("id") or f"q{index}")
        normalized.append(question)
    return normalized


class EnrichmentGateway:
    """Async facade over the Gemini text-generation API."""

    def __init__(self, api_key: str = GEMINI_API_KEY, model: str = GEMINI_MODEL,
                 timeout_seconds: int = GEMINI_TIMEOUT_SECONDS):
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._client = None

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise EnrichmentError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=self.timeout_seconds * 1000),
            )
        return self._client

    def _generate(self, system: str, content: str, temperature: float, max_tokens: int) -> str:
        started = time.time()
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=content,
                config=types.GenerateContentConfig(
                    system_instruction=system,
                    temperature=temperature,
                    max_output_tokens=max_tokens,
                ),
            )
        except EnrichmentError:
            raise
        except Exception as e:
            raise EnrichmentError(f"Gemini request failed: {e}") from e
        finally:
            logger.debug("Gemini call took %.2fs", time.time() - started)

        text = response.text or ""
        if not text.strip():
            raise EnrichmentError("Gemini returned an empty response")
        return text

    async def _complete(self, system: str, content: str, temperature: float, max_tokens: int) -> str:
        return await asyncio.to_thread(self._generate, system, content, temperature, max_tokens)

    # Idea refiner

    async def structure(self, raw_input: str, context: str, tone: str) -> dict:
        text = await self._complete(
            prompts.idea_structuring_prompt(context, tone), raw_input, 0.7, 2000
        )
        result = parse_json_object(text)
        if isinstance(result, Parsed):
            return result.document

        sections = extract_sections(result.raw_text)
        if not any(sections.values()):
            raise EnrichmentError("Could not recover a structured idea from the response")
        logger.info("Structured idea recovered from prose reply")
        return sections

    async def feedback(self, structured_content: dict) -> dict:
        text = await self._complete(
            prompts.IDEA_EVALUATION_PROMPT, json.dumps(structured_content), 0.3, 1500
        )
        result = parse_json_object(text)
        if isinstance(result, Unparseable):
            raise EnrichmentError("Idea evaluation was not valid JSON")
        return result.document

    async def outputs(self, structured_content: dict, context: str) -> dict:
        content = json.dumps(structured_content)
        pitch_script = await self._complete(prompts.pitch_script_prompt(context), content, 0.8, 1500)
        slides_text = await self._complete(prompts.SLIDE_CONTENT_PROMPT, content, 0.7, 2000)

        result = parse_json_array(slides_text)
        slides = result.document if isinstance(result, Parsed) else split_slides(result.raw_text)
        return {"pitch_script": pitch_script.strip(), "slides": slides}

    async def summary(self, structured_content: dict) -> str:
        text = await self._complete(prompts.SUMMARY_PROMPT, json.dumps(structured_content), 0.7, 500)
        return text.strip()

    # Interview simulator

    async def questions(self, configuration: dict) -> list[dict]:
        company = configuration.get("company") or "a company"
        text = await self._complete(
            prompts.question_generation_prompt(configuration),
            f"Generate interview questions for {configuration.get('role')} at {company}",
            0.7,
            2000,
        )
        result = parse_json_array(text)
        questions = result.document if isinstance(result, Parsed) else extract_questions(result.raw_text)
        questions = assign_question_ids(questions)
        if not questions:
            raise EnrichmentError("No interview questions could be generated")
        return questions

    async def interview_feedback(self, questions: list, responses: list, configuration: dict) -> dict:
        content = (
            f"Questions: {json.dumps(questions)}\n\n"
            f"Responses: {json.dumps(responses, default=str)}\n\n"
            f"Configuration: {json.dumps(configuration)}"
        )
        text = await self._complete(prompts.INTERVIEW_FEEDBACK_PROMPT, content, 0.5, 2000)
        result = parse_json_object(text)
        if isinstance(result, Parsed):
            return result.document
        # Keep the report, but never invent a score for it.
        return {"ai_feedback": result.raw_text.strip()}


@lru_cache()
def get_enrichment_gateway() -> EnrichmentGateway:
    """Dependency returning the process-wide gateway."""
    return EnrichmentGateway()
