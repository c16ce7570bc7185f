from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..models import (
    ORIGINAL,
    ImageAsset,
    Variant,
    VariantSelection,
    ViewerState,
)
from .debounce import Debouncer, Scheduler
from .variants import derive_variant_url, normalize_hex_color

logger = logging.getLogger(__name__)

StateListener = Callable[[ViewerState], None]


class ViewerError(Exception):
    """Base class for viewer errors."""


class ViewerClosedError(ViewerError, RuntimeError):
    """Raised when a closed viewer receives a user action."""


class VariantImageViewer:
    """Client-side state of the product image variant picker.

    The viewer is ``Idle`` or ``Loading``. Changing to a variant whose URL
    differs from the displayed one enters ``Loading``; the image-load
    completion or error signal for that URL leaves it. A load error on a
    transformed variant falls back to the original image.
    """

    def __init__(
        self,
        asset: ImageAsset,
        *,
        debounce_delay: float = 0.5,
        scheduler: Optional[Scheduler] = None,
        listener: Optional[StateListener] = None,
    ) -> None:
        self.asset = asset
        self.listener = listener
        self._state = ViewerState(selection=ORIGINAL, current_url=asset.original_url)
        self._previous_url: Optional[str] = None
        self._debouncer = Debouncer(self._apply_custom_color, debounce_delay, scheduler)
        self._closed = False

    @property
    def state(self) -> ViewerState:
        return self._state

    @property
    def selection(self) -> VariantSelection:
        return self._state.selection

    @property
    def selected_variant(self) -> Variant:
        return self._state.selection.variant

    @property
    def current_url(self) -> str:
        return self._state.current_url

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def custom_color(self) -> str:
        return self._state.custom_color

    @property
    def previous_url(self) -> Optional[str]:
        """URL shown before the pending load started; None when idle."""

        return self._previous_url if self._state.is_loading else None

    @property
    def debounce_delay(self) -> float:
        return self._debouncer.delay

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def can_reset(self) -> bool:
        return self.selected_variant is not Variant.ORIGINAL

    def derive(self, selection: VariantSelection) -> str:
        return derive_variant_url(self.asset.original_url, selection)

    def select(self, variant: Variant, color: Optional[str] = None) -> None:
        self._ensure_open()
        variant = Variant(variant)
        custom_color = self._state.custom_color
        if variant is Variant.CUSTOM_COLOR:
            if color is not None:
                custom_color = normalize_hex_color(color)
            selection = VariantSelection(variant, custom_color)
        else:
            selection = VariantSelection(variant)
        self._transition(selection, custom_color)

    def input_custom_color(self, color: str) -> None:
        """Store a raw color-picker value and schedule the recolor."""

        self._ensure_open()
        normalized = normalize_hex_color(color)
        try:
            self._debouncer.trigger(normalized)
        except RuntimeError as exc:
            raise ViewerError(f"Unable to schedule custom color {normalized}: {exc}") from exc
        if normalized != self._state.custom_color:
            self._commit(replace(self._state, custom_color=normalized))

    def handle_load_complete(self, url: str) -> None:
        if not self._accepts_load_signal(url):
            return
        logger.debug("Image loaded: %s", url)
        self._set_loading(False)

    def handle_load_error(self, url: str) -> None:
        if not self._accepts_load_signal(url):
            return
        logger.debug("Image failed to load: %s", url)
        self._set_loading(False)
        if self.selected_variant is not Variant.ORIGINAL:
            logger.info(
                "Transformation failed for %s, reverting to original",
                self.selected_variant.value,
            )
            self._transition(ORIGINAL, self._state.custom_color)

    def reset(self) -> bool:
        self._ensure_open()
        if not self.can_reset:
            return False
        self._transition(ORIGINAL, self._state.custom_color)
        return True

    def close(self) -> None:
        """Release the pending debounce timer; the viewer is inert afterwards."""

        if self._closed:
            return
        self._debouncer.close()
        self._closed = True

    def __enter__(self) -> "VariantImageViewer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _apply_custom_color(self, color: str) -> None:
        if self._closed:
            return
        self.select(Variant.CUSTOM_COLOR, color)

    def _transition(self, selection: VariantSelection, custom_color: str) -> None:
        new_url = self.derive(selection)
        current = self._state
        if new_url == current.current_url:
            if selection == current.selection and custom_color == current.custom_color:
                return
            self._commit(replace(current, selection=selection, custom_color=custom_color))
            return

        logger.debug("Variant %s -> %s", current.selected_variant.value, selection.variant.value)
        self._previous_url = current.current_url
        self._commit(
            ViewerState(
                selection=selection,
                current_url=new_url,
                is_loading=True,
                custom_color=custom_color,
            )
        )

    def _set_loading(self, value: bool) -> None:
        current = self._state
        if current.is_loading == value:
            return
        self._commit(replace(current, is_loading=value))

    def _accepts_load_signal(self, url: str) -> bool:
        if self._closed:
            logger.debug("Ignoring load signal for closed viewer: %s", url)
            return False
        if url != self._state.current_url:
            logger.debug("Ignoring stale load signal: %s", url)
            return False
        return True

    def _commit(self, state: ViewerState) -> None:
        if self._closed:
            return
        self._state = state
        if self.listener is not None:
            self.listener(state)

    def _ensure_open(self) -> None:
        if self._closed:
            raise ViewerClosedError("Viewer has been closed")
