"""
Generation Service.

Forwards study material (photos or pasted text) to the language model with
a fixed revision-notes prompt and reshapes the reply into a title and a
body. The model is reached through a lazily built PydanticAI agent; tests
inject an agent backed by TestModel or FunctionModel.
"""

import re
from dataclasses import dataclass
from typing import Any

from pydantic_ai import Agent, BinaryContent
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from examnotes.backend.core.concurrency import get_semaphore
from examnotes.backend.core.config import get_app_config, get_settings
from examnotes.backend.core.config_schema import GenerationSchema, UploadsSchema
from examnotes.backend.core.exceptions import GenerationError, ValidationError
from examnotes.backend.core.logging import get_logger
from examnotes.backend.schemas.generation import GeneratedNotes
from examnotes.backend.services.base import BaseService

logger = get_logger(__name__)

NOTE_GENERATION_PROMPT = """\
You are an exam prep expert. Create ultra-concise, high-yield revision notes.

FORMAT (use ## for sections, - for bullets):

## Definition
- One-line definition only

## Key Points
- 3-5 most important facts
- What examiners ask about

## Formulas
- Key equations (if any)
- Include units

## Must Remember
- Critical facts to memorize
- Common exam traps

STRICT RULES:
- Maximum 8 words per bullet point
- NO explanations or examples
- NO paragraphs - bullets only
- Focus on facts that appear in exams
- Skip sections if not applicable
- Generate a short, clear title (max 5 words)"""

IMAGE_INSTRUCTION = (
    "Extract text from these textbook/study material images "
    "and convert into exam-focused revision notes:"
)
TEXT_INSTRUCTION = "Convert the following study material into exam-focused revision notes:"

_H1_LINE = re.compile(r"^#[ \t]+(.+)$", re.MULTILINE)
_H2_LINE = re.compile(r"^##[ \t]+(.+)$", re.MULTILINE)


@dataclass(frozen=True)
class ImageUpload:
    """One uploaded photo of study material."""

    data: bytes
    media_type: str
    filename: str | None = None


def parse_generated_notes(
    raw: str,
    default_title: str = "Study Notes",
    title_max_length: int = 60,
) -> GeneratedNotes:
    """
    Split a model reply into a title and note content.

    The first "# heading" line wins, then the first "## heading" line; the
    heading is removed from the content. Without a heading, a first line
    that is not a bullet becomes the title (truncated). Otherwise the
    whole reply is the content under default_title.
    """
    match = _H1_LINE.search(raw) or _H2_LINE.search(raw)
    if match:
        title = match.group(1).strip()
        content = raw.replace(match.group(0), "", 1).strip()
        return GeneratedNotes(title=title, content=content)

    first_line = raw.split("\n")[0]
    if first_line and not first_line.startswith(("-", "#")):
        return GeneratedNotes(
            title=first_line[:title_max_length],
            content=raw[len(first_line):].strip(),
        )

    return GeneratedNotes(title=default_title, content=raw)


def build_generation_agent(
    model: Model | str | None = None,
    config: GenerationSchema | None = None,
) -> Agent[None, str]:
    """
    Create the note generation agent.

    Args:
        model: Model instance or name. Defaults to the OpenAI chat model
            named in generation.yaml, authenticated with OPENAI_API_KEY.
        config: Generation settings. Defaults to generation.yaml.
    """
    config = config or get_app_config().generation

    if model is None:
        from pydantic_ai.models.openai import OpenAIChatModel
        from pydantic_ai.providers.openai import OpenAIProvider

        model = OpenAIChatModel(
            config.model,
            provider=OpenAIProvider(api_key=get_settings().openai_api_key),
        )

    return Agent(
        model,
        output_type=str,
        instructions=NOTE_GENERATION_PROMPT,
        model_settings=ModelSettings(max_tokens=config.max_tokens),
    )


_agent: Agent[None, str] | None = None


def _get_agent() -> Agent[None, str]:
    """Lazy initialization: the agent is only created when first used."""
    global _agent
    if _agent is None:
        _agent = build_generation_agent()
        logger.info(
            "Generation agent initialized",
            extra={"model": get_app_config().generation.model},
        )
    return _agent


class GenerationService(BaseService):
    """
    Service turning study material into revision notes.

    Validates input, calls the language model under the "llm" semaphore,
    and reshapes the reply. Any upstream failure surfaces as
    GenerationError.
    """

    def __init__(
        self,
        agent: Agent[None, str] | None = None,
        generation_config: GenerationSchema | None = None,
        upload_limits: UploadsSchema | None = None,
    ) -> None:
        super().__init__()
        self._agent = agent
        self._config = generation_config or get_app_config().generation
        self._limits = upload_limits or get_app_config().application.uploads

    async def generate_from_images(self, images: list[ImageUpload]) -> GeneratedNotes:
        """
        Generate notes from one or more photos of study material.

        Raises:
            ValidationError: No images, too many, too large, or not images
            GenerationError: The model call failed
        """
        self._validate_images(images)
        self._log_operation(
            "Generating notes from images",
            image_count=len(images),
            total_bytes=sum(len(image.data) for image in images),
        )

        prompt: list[Any] = [IMAGE_INSTRUCTION]
        prompt.extend(
            BinaryContent(data=image.data, media_type=image.media_type)
            for image in images
        )
        return await self._generate(prompt, source_type="ocr")

    async def generate_from_text(self, text: str | None) -> GeneratedNotes:
        """
        Generate notes from pasted study material.

        Raises:
            ValidationError: Text missing or blank
            GenerationError: The model call failed
        """
        self._validate_required({"text": text}, ["text"], message="No text provided")
        self._log_operation("Generating notes from text", text_length=len(text))

        return await self._generate(f"{TEXT_INSTRUCTION}\n\n{text}", source_type="text")

    def _validate_images(self, images: list[ImageUpload]) -> None:
        self._validate_required({"images": images}, ["images"], message="No images provided")

        if len(images) > self._limits.max_files:
            raise ValidationError(
                "Too many images",
                details={"max_files": self._limits.max_files, "received": len(images)},
            )

        for image in images:
            if not image.media_type.startswith("image/"):
                raise ValidationError(
                    "Unsupported file type",
                    details={"filename": image.filename, "media_type": image.media_type},
                )
            if len(image.data) > self._limits.max_file_bytes:
                raise ValidationError(
                    "Image too large",
                    details={
                        "filename": image.filename,
                        "max_file_bytes": self._limits.max_file_bytes,
                    },
                )

    async def _generate(self, prompt: str | list[Any], source_type: str) -> GeneratedNotes:
        async with get_semaphore("llm"):
            try:
                agent = self._agent or _get_agent()
                result = await agent.run(prompt)
            except Exception as e:
                self._logger.error(
                    "Note generation failed",
                    extra={
                        "source_type": source_type,
                        "error_type": type(e).__name__,
                        "error": str(e),
                    },
                )
                raise GenerationError() from e

        usage = result.usage()
        self._log_debug(
            "Model replied",
            source_type=source_type,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
        )

        return parse_generated_notes(
            result.output or "",
            default_title=self._config.default_title,
            title_max_length=self._config.title_max_length,
        )
