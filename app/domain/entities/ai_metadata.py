"""Domain value summarising a content snapshot for automated reuse."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AIMetadata:
    """Structural facts extracted from a page snapshot."""

    component_types: tuple[str, ...] = field(default_factory=tuple)
    layout_style: str = "basic"
    complexity: str = "low"
    has_images: bool = False
    has_buttons: bool = False
    has_text: bool = False
    is_responsive: bool = True


__all__ = ["AIMetadata"]
