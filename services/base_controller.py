"""
Base class for controllers whose observable state lives in a session-state mapping.

In the Streamlit app the mapping is ``st.session_state`` so the UI re-renders
from it on every rerun; tests pass a plain dict.
"""

from typing import Any, Callable, Dict, MutableMapping, Optional

from infrastructure.transport.pipeline import RequestPipeline
from utils.logging_config import get_logger


class SessionStateController:
    """
    Keeps every piece of controller state under ``"<namespace>.<field>"`` keys.

    Subclasses declare ``namespace`` and ``state_defaults`` (field name to a
    zero-argument factory).
    """

    namespace = "controller"
    state_defaults: Dict[str, Callable[[], Any]] = {}

    def __init__(self, pipeline: RequestPipeline, state: Optional[MutableMapping[str, Any]] = None):
        self.pipeline = pipeline
        self.state = state if state is not None else {}
        self.logger = get_logger(self.__class__.__module__)
        self._ensure_state()

    def _key(self, name: str) -> str:
        return f"{self.namespace}.{name}"

    def _ensure_state(self):
        """Initialize missing fields, leaving existing ones untouched across reruns"""
        for name, factory in self.state_defaults.items():
            if self._key(name) not in self.state:
                self.state[self._key(name)] = factory()

    def _get(self, name: str) -> Any:
        return self.state[self._key(name)]

    def _set(self, name: str, value: Any):
        self.state[self._key(name)] = value

    def reset_state(self, *names: str):
        """Restore the given fields (all fields when none are given) to their defaults"""
        for name in names or tuple(self.state_defaults):
            self._set(name, self.state_defaults[name]())

    @property
    def error(self) -> Optional[str]:
        return self.state.get(self._key("error"))

    @property
    def loading(self) -> bool:
        return bool(self.state.get(self._key("loading"), False))
