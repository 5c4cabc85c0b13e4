"""
Suggestion Generator Adapter.

Asks a Gemini model for candidate names, alternatives for a taken name, and
an inspirational quote. Name answers are JSON objects of the form
{"domains": [...]} and are normalized before they leave this module.

In simulation mode no request is made; names are derived deterministically
from the prompt so the rest of the pipeline can be exercised offline.
"""

import re
from typing import Optional, Sequence

from google import generativeai as genai

from .audit_logger import AuditLogger
from .config import GeneratorConfig
from .enums import GenerationErrorCode, LogLevel
from .exceptions import GenerationError
from .name_normalizer import normalize, parse_generated_names


NAMES_SYSTEM_INSTRUCTION = (
    "You are an expert domain name generator. Your task is to generate "
    "creative, brandable, and short domain name ideas based on a "
    "user-provided description. The domain names must not include TLDs like "
    ".com. You must only provide the root domain name. Ensure names are "
    "single words or very short phrases suitable for a URL. You must always "
    "respond in the requested JSON format, even if the user's description is "
    "very short or just a single word."
)

ALTERNATIVES_SYSTEM_INSTRUCTION = (
    "You are an expert domain name generator. When a domain name is taken, "
    "you provide {count} creative, brandable, and clever alternatives. The "
    "alternatives should be short, memorable, and related to the original "
    "idea. Do not include TLDs. You must always respond in the requested "
    "JSON format."
)

QUOTE_SYSTEM_INSTRUCTION = (
    "You share short, genuine quotes that inspire founders naming a new "
    "product. Answer with the quote on the first line and the attribution "
    "on the second line, starting with '- '. Nothing else."
)

# Appended to every name request; the model is asked for JSON output too
JSON_FORMAT_HINT = 'Respond with a JSON object of the form {"domains": ["name", ...]}.'

NAMES_FAILED_MESSAGE = "Failed to generate domain names from AI. Please try again."
ALTERNATIVES_FAILED_MESSAGE = "Failed to generate alternatives from AI. Please try again."
NOT_CONFIGURED_MESSAGE = "No API key configured for name generation."

SIMULATION_SUFFIXES = ("hq", "labs", "ly", "hub", "io", "go", "kit", "base", "nest", "works")
SIMULATION_PREFIXES = ("get", "try", "my")


def build_names_prompt(
    description: str,
    count: int,
    exclude_names: Sequence[str] = (),
) -> str:
    """Build the user prompt for a batch of name ideas."""
    prompt = f'Generate a list of {count} creative domain name ideas for: "{description}".'
    if exclude_names:
        prompt += (
            " Provide completely new ideas that are not on this list: "
            f"{', '.join(exclude_names)}."
        )
    return f"{prompt} {JSON_FORMAT_HINT}"


def build_alternatives_prompt(name: str) -> str:
    return f'The domain name "{name}" is taken. Generate alternatives. {JSON_FORMAT_HINT}'


class SuggestionGenerator:
    """
    Name, alternative and quote generation backed by Gemini.

    The API key comes from the configuration passed in, never from the
    environment directly.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        simulation_mode: bool = False,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        self._config = config or GeneratorConfig()
        self._simulation_mode = simulation_mode
        self._logger = logger
        self._configured = False

    @property
    def is_configured(self) -> bool:
        return bool(self._config.api_key)

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    async def generate(
        self,
        prompt: str,
        exclude_names: Sequence[str] = (),
    ) -> list[str]:
        """
        Generate candidate names for a description.

        Args:
            prompt: Free-text description typed by the user
            exclude_names: Names the answer should not repeat

        Returns:
            Normalized names, possibly fewer than requested, none of them
            in exclude_names

        Raises:
            GenerationError: With a message fit for the user
        """
        excluded = {normalize(n) for n in exclude_names}

        if self._simulation_mode:
            names = self._simulated_names(prompt, self._config.suggestion_count, excluded)
        else:
            request = build_names_prompt(
                prompt, self._config.suggestion_count, list(exclude_names)
            )
            names = await self._request_names(
                NAMES_SYSTEM_INSTRUCTION, request, NAMES_FAILED_MESSAGE
            )

        names = [name for name in names if name not in excluded]
        self._log(
            LogLevel.INFO,
            f"Generated {len(names)} names",
            {"count": len(names), "excluded": len(excluded)},
        )
        return names

    async def generate_alternatives(self, name: str) -> list[str]:
        """
        Generate alternatives for a name that is taken.

        Raises:
            GenerationError: With a message fit for the user
        """
        name = normalize(name)
        if self._simulation_mode:
            names = self._simulated_names(name, self._config.alternative_count, {name})
        else:
            names = await self._request_names(
                ALTERNATIVES_SYSTEM_INSTRUCTION.format(count=self._config.alternative_count),
                build_alternatives_prompt(name),
                ALTERNATIVES_FAILED_MESSAGE,
            )
        return [n for n in names if n != name]

    async def generate_quote(self, prompt: str) -> str:
        """
        Generate an inspirational quote, "quote\\n- attribution".

        Never raises; any failure yields the configured fallback quote.
        """
        if self._simulation_mode or not self.is_configured:
            return self._config.fallback_quote

        try:
            model = self._model(QUOTE_SYSTEM_INSTRUCTION)
            response = await model.generate_content_async(
                f'Share a quote that fits this idea: "{prompt}".',
                generation_config=genai.types.GenerationConfig(
                    candidate_count=1,
                    temperature=0.9,
                ),
            )
            text = (response.text or "").strip()
        except Exception as e:
            self._log_error("Quote generation failed, using fallback", e)
            return self._config.fallback_quote

        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if len(lines) < 2:
            return self._config.fallback_quote
        return f"{lines[0]}\n{lines[-1]}"

    async def _request_names(
        self,
        system_instruction: str,
        request: str,
        failure_message: str,
    ) -> list[str]:
        if not self.is_configured:
            raise GenerationError(
                code=GenerationErrorCode.NOT_CONFIGURED.value,
                message=NOT_CONFIGURED_MESSAGE,
            )

        try:
            model = self._model(system_instruction)
            response = await model.generate_content_async(
                request,
                generation_config=genai.types.GenerationConfig(
                    candidate_count=1,
                    response_mime_type="application/json",
                ),
            )
            response_text = response.text
        except Exception as e:
            self._log_error("Generation request failed", e)
            raise GenerationError(
                code=GenerationErrorCode.REQUEST_FAILED.value,
                message=failure_message,
                details={"cause": str(e)},
            )

        try:
            return parse_generated_names(response_text)
        except GenerationError as e:
            self._log_error(
                "Generator answer could not be parsed", e, {"response_text": response_text}
            )
            raise GenerationError(
                code=e.code,
                message=failure_message,
                details=e.details,
            )

    def _model(self, system_instruction: str):
        if not self._configured:
            genai.configure(api_key=self._config.api_key)
            self._configured = True
        return genai.GenerativeModel(
            model_name=self._config.model,
            system_instruction=system_instruction,
        )

    def _simulated_names(
        self, seed: str, count: int, excluded: set[str]
    ) -> list[str]:
        words = [normalize(w) for w in re.findall(r"[A-Za-z0-9]+", seed)]
        words = [w for w in words if len(w) > 2] or [normalize(seed) or "name"]
        stem = "".join(words[:2])

        names = []
        candidates = [f"{stem}{s}" for s in SIMULATION_SUFFIXES]
        candidates += [f"{p}{stem}" for p in SIMULATION_PREFIXES]
        for candidate in candidates:
            if candidate not in excluded and candidate not in names:
                names.append(candidate)
            if len(names) == count:
                break
        return names

    def _log_error(
        self, message: str, error: Exception, data: Optional[dict] = None
    ) -> None:
        if self._logger:
            self._logger.log_error("SuggestionGenerator", message, error, data)

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "SuggestionGenerator", message, data)
