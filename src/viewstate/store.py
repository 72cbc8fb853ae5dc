"""Mode state machine: immutable snapshots, pure reducers and a shared store.

Every transition is accepted; there is no terminal or invalid state.  The
reducers return new :class:`ModeState` snapshots and never mutate.  The
:class:`ModeStore` serializes writers behind a lock and hands readers the
current snapshot without locking (copy-on-write).
"""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Mapping

from viewstate.modes import DisplayMode, ViewMode, ViewModeScaling, get_view_mode_scaling

logger = logging.getLogger("starscale.store")


class DetailLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class ModeFeatures:
    scientific_info: bool = False
    educational_content: bool = False
    profile_info: bool = False
    jump_point_info: bool = False


REALISTIC_FEATURES = ModeFeatures(scientific_info=True, educational_content=True)
NAVIGATIONAL_FEATURES = ModeFeatures(scientific_info=True, jump_point_info=True)
PROFILE_FEATURES = ModeFeatures(profile_info=True, jump_point_info=True)

DISPLAY_MODE_FEATURES: dict[DisplayMode, ModeFeatures] = {
    DisplayMode.REALISTIC: REALISTIC_FEATURES,
    DisplayMode.NAVIGATIONAL: NAVIGATIONAL_FEATURES,
    DisplayMode.PROFILE: PROFILE_FEATURES,
}

VIEW_MODE_FEATURES: dict[ViewMode, ModeFeatures] = {
    ViewMode.EXPLORATIONAL: REALISTIC_FEATURES,
    ViewMode.NAVIGATIONAL: NAVIGATIONAL_FEATURES,
    ViewMode.PROFILE: PROFILE_FEATURES,
}

VIEW_MODE_DETAIL: dict[ViewMode, DetailLevel] = {
    ViewMode.EXPLORATIONAL: DetailLevel.MEDIUM,
    ViewMode.NAVIGATIONAL: DetailLevel.MEDIUM,
    ViewMode.PROFILE: DetailLevel.LOW,
}


@dataclass(frozen=True, slots=True)
class DataSource:
    type: DisplayMode
    content: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", MappingProxyType(dict(self.content)))


@dataclass(frozen=True, slots=True)
class ModeState:
    mode: DisplayMode = DisplayMode.REALISTIC
    view_mode: ViewMode = ViewMode.EXPLORATIONAL
    features: ModeFeatures = REALISTIC_FEATURES
    data_source: DataSource | None = None
    detail_level: DetailLevel = DetailLevel.MEDIUM

    @property
    def scaling(self) -> ViewModeScaling:
        return get_view_mode_scaling(self.view_mode)


INITIAL_STATE = ModeState()


# --------------------------------------------------------------------------- #
#  Reducers
# --------------------------------------------------------------------------- #

def set_mode(state: ModeState, mode: DisplayMode | str) -> ModeState:
    """Switch display mode (unknown modes fall back to realistic).

    Applies that mode's feature preset and clears the data source.
    """
    mode = DisplayMode.coerce(mode)
    return replace(state, mode=mode, features=DISPLAY_MODE_FEATURES[mode], data_source=None)


def set_view_mode(state: ModeState, view_mode: ViewMode | str) -> ModeState:
    view_mode = ViewMode.coerce(view_mode)
    return replace(state, view_mode=view_mode, features=VIEW_MODE_FEATURES[view_mode])


def toggle_feature(state: ModeState, feature: str) -> ModeState:
    current = getattr(state.features, feature)  # AttributeError for unknown flags
    return replace(state, features=replace(state.features, **{feature: not current}))


def set_data_source(state: ModeState, data_source: DataSource | None) -> ModeState:
    return replace(state, data_source=data_source)


def optimize_rendering(state: ModeState, view_mode: ViewMode | str) -> ModeState:
    return replace(state, detail_level=VIEW_MODE_DETAIL[ViewMode.coerce(view_mode)])


def reset(state: ModeState | None = None) -> ModeState:
    return INITIAL_STATE


# --------------------------------------------------------------------------- #
#  Shared store
# --------------------------------------------------------------------------- #

Listener = Callable[[ModeState, ModeState], None]


class ModeStore:
    """Read-mostly holder of the current :class:`ModeState`.

    Writes go through :meth:`dispatch` under a lock; ``state`` is a plain
    attribute read of an immutable snapshot.  Listeners are called outside
    the lock with ``(old, new)`` after each write.
    """

    def __init__(self, initial: ModeState = INITIAL_STATE) -> None:
        self._state = initial
        self._revision = 0
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> ModeState:
        return self._state

    @property
    def revision(self) -> int:
        return self._revision

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, reducer: Callable[..., ModeState], *args: Any) -> ModeState:
        with self._lock:
            old = self._state
            new = reducer(old, *args)
            self._state = new
            self._revision += 1
            revision = self._revision
            listeners = list(self._listeners)
        logger.debug("%s%r -> mode=%s view=%s (rev %d)", reducer.__name__, args,
                     new.mode.value, new.view_mode.value, revision)
        for listener in listeners:
            listener(old, new)
        return new

    # Convenience wrappers

    def set_mode(self, mode: DisplayMode | str) -> ModeState:
        return self.dispatch(set_mode, mode)

    def set_view_mode(self, view_mode: ViewMode | str) -> ModeState:
        return self.dispatch(set_view_mode, view_mode)

    def toggle_feature(self, feature: str) -> ModeState:
        return self.dispatch(toggle_feature, feature)

    def set_data_source(self, data_source: DataSource | None) -> ModeState:
        return self.dispatch(set_data_source, data_source)

    def optimize_rendering(self, view_mode: ViewMode | str) -> DetailLevel:
        return self.dispatch(optimize_rendering, view_mode).detail_level

    def reset(self) -> ModeState:
        return self.dispatch(reset)
