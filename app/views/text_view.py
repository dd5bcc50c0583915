"""Plain-text rendering of a `MetadataVM` for console output."""

from __future__ import annotations

from app.viewmodels.metadata_vm import MetadataVM
from core.models import DisplayGroup, DisplayItem

INDENT = "  "
NO_AI_DATA_TEXT = "No AI generation parameters found."


def _rule(title: str) -> str:
    return f"\n{title.upper()}\n{'-' * len(title)}"


def _items(items: list[DisplayItem]) -> list[str]:
    width = max((len(item.label) for item in items), default=0)
    return [f"{INDENT}{item.label.ljust(width)}  {item.value}" for item in items]


def _group(group: DisplayGroup) -> list[str]:
    return [_rule(group.title), *_items(group.items)]


def render_formatted(vm: MetadataVM) -> str:
    lines: list[str] = [vm.headline]
    if vm.camera_info.subtitle:
        lines.append(vm.camera_info.subtitle)

    if vm.stats:
        lines.append(INDENT + " | ".join(f"{s.label}: {s.value}" for s in vm.stats))

    if vm.has_context:
        lines.append(_rule("Image Context"))
        for text in (vm.capture_string, vm.technical_specs, vm.edit_string):
            if text:
                lines.append(INDENT + text)

    info = vm.description_info
    if info.has_content:
        lines.append(_rule("Description & Rights"))
        if info.description:
            lines.append(f'{INDENT}"{info.description}"')
        if info.copyright:
            lines.append(f"{INDENT}© {info.copyright}")
        if info.artist:
            lines.append(f"{INDENT}By {info.artist}")

    for group in vm.groups:
        lines.extend(_group(group))

    if vm.gps is not None:
        lines.append(_rule("Location"))
        lines.extend(_items(vm.gps_items))
        lines.append(f"{INDENT}{vm.maps_url}")

    return "\n".join(lines)


def render_ai(vm: MetadataVM) -> str:
    data = vm.ai_data
    if data is None:
        return NO_AI_DATA_TEXT
    lines: list[str] = []
    if data.prompt:
        lines.extend([_rule("Prompt"), data.prompt])
    if data.negative_prompt:
        lines.extend([_rule("Negative Prompt"), data.negative_prompt])
    group = vm.ai_settings_group
    if group is not None:
        lines.extend(_group(group))
    return "\n".join(lines).strip() or NO_AI_DATA_TEXT


def render(vm: MetadataVM, mode: str = "formatted") -> str:
    """Render `vm` in one of the view modes: formatted, raw or ai."""
    if mode == "raw":
        return vm.raw_json
    if mode == "ai":
        return render_ai(vm)
    return render_formatted(vm)
