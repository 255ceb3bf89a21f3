"""
Prompt extraction from a ComfyUI "prompt" text chunk.

The chunk holds the runtime prompt graph: a mapping of node id to
{"class_type": ..., "inputs": {...}}, optionally wrapped in {"nodes": {...}}.
Sampler nodes point at their text encoders through [node_id, output_index]
links; those links give the positive/negative prompts, and the sampler inputs
give the settings. Anything unexpected degrades to missing fields.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ...shared import get_logger
from .chunks import TextChunk

logger = get_logger(__name__)

PROMPT_KEYWORD = "prompt"
SAMPLER_CLASS_MARKER = "KSampler"
TEXT_ENCODER_CLASS = "CLIPTextEncode"

# Sampler input key -> settings label, in discovery order.
SETTINGS_MAP: tuple[tuple[str, str], ...] = (
    ("steps", "steps"),
    ("cfg", "cfg"),
    ("cfg_scale", "cfg_scale"),
    ("sampler_name", "sampler"),
    ("scheduler", "scheduler"),
    ("seed", "seed"),
    ("denoise", "denoise"),
)

# Integral floats at or above this switch to exponent notation.
_INTEGRAL_FLOAT_LIMIT = 1e21


@dataclass(frozen=True)
class PromptGraphNode:
    node_id: str
    class_type: str | None = None
    inputs: dict[str, Any] | None = None

    def text(self) -> str | None:
        if self.inputs is None:
            return None
        return _as_str(self.inputs.get("text"))


@dataclass
class PromptPayload:
    positive_prompt: str | None = None
    negative_prompt: str | None = None
    settings: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "positive_prompt": self.positive_prompt,
            "negative_prompt": self.negative_prompt,
            "settings": dict(self.settings),
        }


def _as_dict(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _coerce_setting_value(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    # bool first: it is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        # 8.0 -> "8"
        if value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
            return str(int(value))
        return str(value)
    return None


def _reject_json_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _link_node_id(value: Any) -> str | None:
    if isinstance(value, list) and len(value) == 2 and isinstance(value[0], str) and value[0]:
        return value[0]
    return None


def _as_node(node_id: str, value: Any) -> PromptGraphNode | None:
    record = _as_dict(value)
    if record is None:
        return None
    return PromptGraphNode(
        node_id=node_id,
        class_type=_as_str(record.get("class_type")),
        inputs=_as_dict(record.get("inputs")),
    )


def _find_prompt_chunk(chunks: Sequence[TextChunk]) -> TextChunk | None:
    for chunk in chunks:
        if chunk.keyword == PROMPT_KEYWORD:
            return chunk
    return None


def _load_graph_nodes(graph: dict[str, Any]) -> list[PromptGraphNode]:
    container = _as_dict(graph.get("nodes"))
    if container is None:
        container = graph
    nodes: list[PromptGraphNode] = []
    for node_id, value in container.items():
        node = _as_node(str(node_id), value)
        if node is not None:
            nodes.append(node)
    return nodes


def _resolve_linked_text(nodes_by_id: dict[str, PromptGraphNode], link: Any) -> str | None:
    node_id = _link_node_id(link)
    if node_id is None:
        return None
    target = nodes_by_id.get(node_id)
    return target.text() if target is not None else None


def _apply_sampler(payload: PromptPayload, node: PromptGraphNode, nodes_by_id: dict[str, PromptGraphNode]) -> None:
    ins = node.inputs or {}

    if not payload.positive_prompt:
        positive = _resolve_linked_text(nodes_by_id, ins.get("positive"))
        if positive is not None:
            payload.positive_prompt = positive
    if not payload.negative_prompt:
        negative = _resolve_linked_text(nodes_by_id, ins.get("negative"))
        if negative is not None:
            payload.negative_prompt = negative

    for key, label in SETTINGS_MAP:
        if payload.settings.get(label):
            continue
        value = _coerce_setting_value(ins.get(key))
        if value is not None:
            payload.settings[label] = value


def _extract_from_graph(graph: dict[str, Any]) -> PromptPayload:
    payload = PromptPayload()
    nodes = _load_graph_nodes(graph)
    nodes_by_id = {node.node_id: node for node in nodes}
    text_encoders = [
        node for node in nodes
        if node.class_type == TEXT_ENCODER_CLASS and node.text() is not None
    ]

    for node in nodes:
        if not node.class_type or node.inputs is None:
            continue
        if SAMPLER_CLASS_MARKER in node.class_type:
            _apply_sampler(payload, node, nodes_by_id)

    # Without a sampler link, the first two encoders are taken as positive/negative.
    if not payload.positive_prompt and len(text_encoders) >= 1:
        payload.positive_prompt = text_encoders[0].text()
    if not payload.negative_prompt and len(text_encoders) >= 2:
        payload.negative_prompt = text_encoders[1].text()

    return payload


def extract_prompt_payload(chunks: Sequence[TextChunk]) -> PromptPayload:
    """
    Recover prompts and sampler settings from the first "prompt" chunk.

    Never raises: missing chunks, invalid JSON and unknown graph shapes yield
    an empty or partial payload.
    """
    chunk = _find_prompt_chunk(chunks)
    if chunk is None:
        return PromptPayload()

    try:
        parsed = json.loads(chunk.text, parse_constant=_reject_json_constant)
    except (ValueError, RecursionError):
        logger.debug("Prompt chunk is not JSON; using raw text as the positive prompt")
        return PromptPayload(positive_prompt=chunk.text)

    if isinstance(parsed, str):
        return PromptPayload(positive_prompt=parsed)

    graph = _as_dict(parsed)
    if graph is None:
        logger.debug("Prompt chunk JSON is a %s, not a node graph", type(parsed).__name__)
        return PromptPayload()

    return _extract_from_graph(graph)
