"""Editing session holding the elements placed on one product mockup."""

import logging
import uuid
from typing import Any, Iterable, Literal, Optional, Union

from pydantic import TypeAdapter

from printzone.constraints.engine import ConstraintEngine
from printzone.constraints.mapping import region_center_fraction, resolve_scale
from printzone.dsl.schema import (
    Delimitation,
    DesignElement,
    ElementType,
    ImageElement,
    TextElement,
    Viewport,
)
from printzone.editor.gestures import GestureController, GestureOutcome, Point

logger = logging.getLogger(__name__)

_element_adapter = TypeAdapter(DesignElement)

# Defaults for newly added layers
DEFAULT_TEXT = "Votre texte"
DEFAULT_TEXT_WIDTH = 150.0
DEFAULT_TEXT_HEIGHT = 40.0
DEFAULT_FONT_SIZE = 24.0
IMAGE_REGION_FILL = 0.6  # New images span at most 60% of the region
DUPLICATE_OFFSET = 0.05

TEXT_STYLE_KEYS = {
    "font_family",
    "color",
    "font_weight",
    "font_style",
    "text_decoration",
    "text_align",
}

Handle = Literal["move", "resize", "rotate"]


def generate_id() -> str:
    """Generate a unique element ID."""
    return f"element-{uuid.uuid4().hex[:12]}"


def migrate_element(raw: Union[dict[str, Any], DesignElement]) -> DesignElement:
    """Load an element, filling text fields added after it was saved.

    Text elements saved without a base font size, base width or curve take
    them from their current font size, width, and a straight baseline.
    """
    if not isinstance(raw, dict):
        return raw

    data = dict(raw)
    if data.get("type") == ElementType.TEXT:
        if not data.get("base_font_size"):
            data["base_font_size"] = data.get("font_size", DEFAULT_FONT_SIZE)
        if not data.get("base_width"):
            data["base_width"] = data.get("width", DEFAULT_TEXT_WIDTH)
        if data.get("curve") is None:
            data["curve"] = 0
    return _element_adapter.validate_python(data)


class DesignSession:
    """Ordered stack of design elements constrained to one delimitation.

    The list order is the paint order; `z_index` mirrors it.
    """

    def __init__(
        self,
        delimitation: Optional[Delimitation],
        engine: Optional[ConstraintEngine] = None,
    ) -> None:
        """Initialize the session.

        Args:
            delimitation: Printable region of the product view.
            engine: Constraint engine (a default one is created when omitted).
        """
        self.delimitation = delimitation
        self.engine = engine or ConstraintEngine()
        self.gestures = GestureController(self.engine)
        self.elements: list[DesignElement] = []
        self.selected_id: Optional[str] = None
        self.at_boundary = False

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, element_id: str) -> DesignElement:
        """Find an element by id.

        Raises:
            KeyError: If no element has this id.
        """
        for element in self.elements:
            if element.id == element_id:
                return element
        raise KeyError(element_id)

    def _index(self, element_id: str) -> int:
        for i, element in enumerate(self.elements):
            if element.id == element_id:
                return i
        raise KeyError(element_id)

    def _replace(self, element: DesignElement) -> DesignElement:
        self.elements[self._index(element.id)] = element
        return element

    def _get_text(self, element_id: str) -> TextElement:
        element = self.get(element_id)
        if not isinstance(element, TextElement):
            raise ValueError(f"Element {element_id} is not a text element")
        return element

    @property
    def selected(self) -> Optional[DesignElement]:
        """Currently selected element, if any."""
        if self.selected_id is None:
            return None
        try:
            return self.get(self.selected_id)
        except KeyError:
            return None

    def select(self, element_id: Optional[str]) -> None:
        """Select an element, or clear the selection with None."""
        if element_id is not None:
            self.get(element_id)
        self.selected_id = element_id

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_elements(self, elements: Iterable[Union[dict[str, Any], DesignElement]]) -> None:
        """Replace the stack with saved elements, migrating older text layers."""
        self.elements = [migrate_element(e) for e in elements]
        self.selected_id = None
        logger.info(f"Loaded {len(self.elements)} elements")

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    def _region_center(self, viewport: Viewport) -> tuple[float, float]:
        scale = resolve_scale(viewport, self.delimitation)
        if scale is None:
            return 0.5, 0.5
        return region_center_fraction(viewport, scale)

    def add_text(self, viewport: Viewport, text: str = DEFAULT_TEXT) -> TextElement:
        """Add a straight, unrotated text layer centered in the region."""
        x, y = self._region_center(viewport)
        element = TextElement(
            id=generate_id(),
            text=text,
            x=x,
            y=y,
            width=DEFAULT_TEXT_WIDTH,
            height=DEFAULT_TEXT_HEIGHT,
            font_size=DEFAULT_FONT_SIZE,
            base_font_size=DEFAULT_FONT_SIZE,
            base_width=DEFAULT_TEXT_WIDTH,
            z_index=len(self.elements),
        )
        self.elements.append(element)
        self.selected_id = element.id
        logger.info(f"Added text element {element.id}")
        return element

    def add_image(
        self,
        image_url: str,
        natural_width: float,
        natural_height: float,
        viewport: Viewport,
        design_id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> ImageElement:
        """Add an image layer sized to fit 60% of the region, centered.

        Args:
            image_url: Image source.
            natural_width: Intrinsic width.
            natural_height: Intrinsic height.
            viewport: Current rendering surface.
            design_id: Vendor design identifier.
            metadata: Commerce metadata carried with the layer.

        Returns:
            The new element.
        """
        aspect_ratio = natural_width / natural_height
        scale = resolve_scale(viewport, self.delimitation)

        if scale is None:
            max_width, max_height = natural_width, natural_height
            x, y = 0.5, 0.5
        else:
            # Fit in pixels, then store in reference units
            max_width_px = scale.bounds.width * IMAGE_REGION_FILL
            max_height_px = scale.bounds.height * IMAGE_REGION_FILL
            width_px = max_width_px
            height_px = max_width_px / aspect_ratio
            if height_px > max_height_px:
                height_px = max_height_px
                width_px = max_height_px * aspect_ratio
            max_width = width_px / scale.scale_x
            max_height = height_px / scale.scale_y
            x, y = region_center_fraction(viewport, scale)

        element = ImageElement(
            id=generate_id(),
            image_url=image_url,
            x=x,
            y=y,
            width=max_width,
            height=max_height,
            natural_width=natural_width,
            natural_height=natural_height,
            design_id=design_id,
            metadata=metadata or {},
            z_index=len(self.elements),
        )
        self.elements.append(element)
        self.selected_id = element.id
        logger.info(f"Added image element {element.id} ({element.width:.0f}x{element.height:.0f})")
        return element

    def duplicate(self, element_id: str, viewport: Viewport) -> DesignElement:
        """Copy an element on top of the stack, nudged down and right."""
        source = self.get(element_id)
        copy = source.model_copy(update={"id": generate_id(), "z_index": len(self.elements)})
        copy = self.engine.move(
            copy,
            source.x + DUPLICATE_OFFSET,
            source.y + DUPLICATE_OFFSET,
            viewport,
            self.delimitation,
        )
        self.elements.append(copy)
        self.selected_id = copy.id
        logger.info(f"Duplicated {element_id} as {copy.id}")
        return copy

    # ------------------------------------------------------------------
    # Removal & layering
    # ------------------------------------------------------------------

    def delete(self, element_id: str) -> None:
        """Remove an element."""
        del self.elements[self._index(element_id)]
        if self.selected_id == element_id:
            self.selected_id = None
        if self.gestures.target_id == element_id:
            self.gestures.end()
        logger.info(f"Deleted element {element_id}")

    def move_layer(self, element_id: str, direction: Literal["up", "down"]) -> None:
        """Swap an element with its neighbour and renumber z-indices."""
        index = self._index(element_id)
        if direction == "up" and index < len(self.elements) - 1:
            swap = index + 1
        elif direction == "down" and index > 0:
            swap = index - 1
        else:
            return

        self.elements[index], self.elements[swap] = self.elements[swap], self.elements[index]
        self.elements = [e.model_copy(update={"z_index": i}) for i, e in enumerate(self.elements)]

    # ------------------------------------------------------------------
    # Property edits
    # ------------------------------------------------------------------

    def update_text(self, element_id: str, text: str) -> TextElement:
        """Replace the content of a text layer."""
        element = self._get_text(element_id)
        return self._replace(element.model_copy(update={"text": text}))

    def update_text_property(
        self,
        element_id: str,
        key: str,
        value: Any,
        viewport: Viewport,
    ) -> TextElement:
        """Edit a text attribute.

        A manual font size becomes the new base for proportional scaling. A
        curvature edit is clamped to the region.

        Raises:
            KeyError: Unknown element.
            ValueError: Not a text element, or unsupported key.
        """
        element = self._get_text(element_id)

        if key == "font_size":
            logger.debug(f"Rebasing font of {element_id} to {value} at width {element.width}")
            updated = TextElement.model_validate(
                {
                    **element.model_dump(),
                    "font_size": value,
                    "base_font_size": value,
                    "base_width": element.width,
                }
            )
            updated = self.engine.settle_curve(updated, viewport, self.delimitation)
        elif key == "curve":
            updated = self.engine.set_curve(element, value, viewport, self.delimitation)
        elif key in TEXT_STYLE_KEYS:
            updated = TextElement.model_validate({**element.model_dump(), key: value})
        else:
            raise ValueError(f"Unsupported text property: {key}")

        return self._replace(updated)

    def set_size(
        self,
        element_id: str,
        width: float,
        height: float,
        viewport: Viewport,
    ) -> DesignElement:
        """Explicit numeric size edit, clamped like a resize gesture."""
        element = self.get(element_id)
        floor = self.engine.tuning.min_element_size
        width = max(floor, width)
        height = max(floor, height)
        resized, self.at_boundary = self.engine.resize(
            element, width, height, viewport, self.delimitation, width / height
        )
        return self._replace(resized)

    # ------------------------------------------------------------------
    # Pointer gestures
    # ------------------------------------------------------------------

    def pointer_down(
        self,
        element_id: str,
        handle: Handle,
        pointer: Point,
        viewport: Viewport,
    ) -> None:
        """Start a gesture on an element handle."""
        element = self.get(element_id)
        self.selected_id = element_id

        if handle == "move":
            self.gestures.begin_drag(element, pointer)
        elif handle == "resize":
            self.gestures.begin_resize(element, pointer)
        elif handle == "rotate":
            self.gestures.begin_rotate(element, pointer, viewport)
        else:
            raise ValueError(f"Unknown handle: {handle}")

    def pointer_move(self, pointer: Point, viewport: Viewport) -> Optional[DesignElement]:
        """Advance the active gesture. Returns the updated element, or None when idle."""
        target_id = self.gestures.target_id
        if target_id is None:
            return None

        outcome: GestureOutcome = self.gestures.move(
            self.get(target_id), pointer, viewport, self.delimitation
        )
        self.at_boundary = outcome.at_boundary
        return self._replace(outcome.element)

    def pointer_up(self) -> None:
        """End the active gesture; the selection is kept."""
        self.gestures.end()
        self.at_boundary = False
