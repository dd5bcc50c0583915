"""Parse AI image-generation parameters embedded in image metadata.

Two dialects are supported and tried in order, the first success winning:

1. ComfyUI API workflows: a JSON object mapping node ids to
   ``{"inputs": ..., "class_type": ..., "_meta": ...}``. The sampler node is
   located and its links are followed a single hop to the checkpoint loader
   and the positive/negative text encoders.
2. A1111 / WebUI flat text: the prompt, an optional ``Negative prompt:``
   block, and a trailing ``Key: value, Key: value`` settings line.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import json
from typing import Any

from loguru import logger

from core.models import AIGenerationData, MetadataBag
from core.services.interfaces import ParseResult
from core.services.tag_resolver import is_primitive, resolve_tag, stringify

SAMPLER_TYPES = frozenset({"KSampler", "KSamplerAdvanced"})
CHECKPOINT_LOADER_TYPES = frozenset({"CheckpointLoaderSimple", "CheckpointLoader"})
TEXT_ENCODER_TYPES = frozenset({"CLIPTextEncode", "CLIPTextEncodeSDXL"})
LATENT_IMAGE_TYPE = "EmptyLatentImage"

# sampler input -> settings label
SAMPLER_SETTINGS: list[tuple[str, str]] = [
    ("seed", "Seed"),
    ("steps", "Steps"),
    ("cfg", "CFG scale"),
    ("sampler_name", "Sampler"),
    ("scheduler", "Scheduler"),
    ("denoise", "Denoise"),
]

NEGATIVE_PROMPT_MARKER = "Negative prompt:"
SETTINGS_LINE_MARKERS = ("Steps:", "Model:")

# Raw text tags that may carry generation parameters, in lookup order.
DEFAULT_PARAMETER_TAGS: tuple[str, ...] = ("parameters", "prompt", "workflow")

Workflow = Mapping[str, Any]


def _nodes(workflow: Workflow) -> Iterable[Mapping[str, Any]]:
    return (node for node in workflow.values() if isinstance(node, Mapping))


def _inputs(node: Mapping[str, Any] | None) -> Mapping[str, Any]:
    inputs = node.get("inputs") if node else None
    return inputs if isinstance(inputs, Mapping) else {}


def _class_type(node: Mapping[str, Any]) -> str | None:
    class_type = node.get("class_type")
    return class_type if isinstance(class_type, str) else None


def _linked_node(workflow: Workflow, link: Any) -> Mapping[str, Any] | None:
    """Follow a ``[node_id, output_index]`` link one hop."""
    if not isinstance(link, (list, tuple)) or not link:
        return None
    node = workflow.get(str(link[0]))
    return node if isinstance(node, Mapping) else None


def _prompt_text(workflow: Workflow, link: Any) -> str:
    node = _linked_node(workflow, link)
    if node is None or _class_type(node) not in TEXT_ENCODER_TYPES:
        return ""
    text = _inputs(node).get("text")
    return str(text) if text else ""


def _is_set(value: Any) -> bool:
    return is_primitive(value) and value != ""


def parse_comfyui_workflow(workflow: Workflow) -> AIGenerationData:
    """Extract prompts and settings from a ComfyUI API workflow."""
    data = AIGenerationData()

    sampler = next((n for n in _nodes(workflow) if _class_type(n) in SAMPLER_TYPES), None)
    if sampler is not None:
        inputs = _inputs(sampler)
        for key, label in SAMPLER_SETTINGS:
            value = inputs.get(key)
            if _is_set(value):
                data.settings[label] = stringify(value)

        model_node = _linked_node(workflow, inputs.get("model"))
        if model_node is not None and _class_type(model_node) in CHECKPOINT_LOADER_TYPES:
            ckpt_name = _inputs(model_node).get("ckpt_name")
            if ckpt_name:
                data.settings["Model"] = str(ckpt_name)

        data.prompt = _prompt_text(workflow, inputs.get("positive"))
        data.negative_prompt = _prompt_text(workflow, inputs.get("negative"))

    latent = next((n for n in _nodes(workflow) if _class_type(n) == LATENT_IMAGE_TYPE), None)
    if latent is not None:
        width, height = _inputs(latent).get("width"), _inputs(latent).get("height")
        if _is_set(width) and _is_set(height):
            data.settings["Size"] = f"{stringify(width)}x{stringify(height)}"

    return data


def _structured_attempt(raw: str) -> ParseResult[AIGenerationData]:
    if not raw.strip().startswith("{"):
        return ParseResult.fail("not a JSON object")
    try:
        workflow = json.loads(raw)
    except (ValueError, RecursionError) as ex:
        return ParseResult.fail(f"invalid JSON: {ex}")
    if not isinstance(workflow, Mapping):
        return ParseResult.fail("JSON is not an object")
    return ParseResult.success(parse_comfyui_workflow(workflow))


def parse_settings_line(line: str) -> dict[str, str]:
    """Parse ``"Steps: 20, Sampler: Euler a"`` into an ordered dict.

    Items without a colon are dropped; later duplicate keys overwrite earlier
    ones.
    """
    settings: dict[str, str] = {}
    for item in line.split(", "):
        key, sep, value = item.partition(":")
        if sep:
            settings[key.strip()] = value.strip()
    return settings


def _split_settings_line(region: str) -> tuple[str, str]:
    """Split `region` into (content, settings line) using the trailing-line sniff."""
    head, _, last_line = region.rpartition("\n")
    if any(marker in last_line for marker in SETTINGS_LINE_MARKERS):
        return head, last_line.strip()
    return region, ""


def parse_a1111_parameters(raw: str) -> AIGenerationData:
    """Parse WebUI-style flat text parameters."""
    prompt_part, marker, rest = raw.partition(NEGATIVE_PROMPT_MARKER)
    negative_part = ""
    settings_line = ""
    if marker:
        negative_part, settings_line = _split_settings_line(rest)
    else:
        prompt_part, settings_line = _split_settings_line(prompt_part)

    return AIGenerationData(
        prompt=prompt_part.strip(),
        negative_prompt=negative_part.strip(),
        settings=parse_settings_line(settings_line) if settings_line else {},
    )


def _flat_text_attempt(raw: str) -> ParseResult[AIGenerationData]:
    try:
        return ParseResult.success(parse_a1111_parameters(raw))
    except Exception as ex:  # pylint: disable=broad-exception-caught
        logger.error("Failed to parse AI parameters: {}", ex)
        return ParseResult.fail(str(ex))


PARSE_ATTEMPTS: list[Callable[[str], ParseResult[AIGenerationData]]] = [
    _structured_attempt,
    _flat_text_attempt,
]


def parse_ai_parameters(raw: str | None) -> AIGenerationData | None:
    """Parse embedded generation parameters, or None when nothing usable.

    A text starting with ``{`` that is not valid JSON falls through to the
    flat-text parser.
    """
    if not raw:
        return None
    for attempt in PARSE_ATTEMPTS:
        result = attempt(raw)
        if result.ok:
            return result.value
        logger.debug("{} skipped: {}", attempt.__name__, result.failure.reason)
    return None


def find_parameter_text(
    bag: MetadataBag | None, tag_names: Iterable[str] = DEFAULT_PARAMETER_TAGS
) -> str | None:
    """Return the first configured raw text tag that resolves to a value."""
    for name in tag_names:
        text = resolve_tag(bag, name)
        if text is not None:
            return text
    return None


def has_ai_metadata(
    bag: MetadataBag | None, tag_names: Iterable[str] = DEFAULT_PARAMETER_TAGS
) -> bool:
    return find_parameter_text(bag, tag_names) is not None


def find_ai_parameters(
    bag: MetadataBag | None, tag_names: Iterable[str] = DEFAULT_PARAMETER_TAGS
) -> AIGenerationData | None:
    """Locate and parse generation parameters stored in the bag."""
    return parse_ai_parameters(find_parameter_text(bag, tag_names))
