"""
User-visible notices raised by the request pipeline.
"""

from typing import List, Tuple

import streamlit as st

from utils.logging_config import get_logger


class Notifier:
    """Interface: ``error`` and ``warning`` each take one human-readable message"""

    def error(self, message: str) -> None:
        raise NotImplementedError

    def warning(self, message: str) -> None:
        raise NotImplementedError


class LoggingNotifier(Notifier):
    """Headless notifier; keeps the notices it has shown"""

    def __init__(self):
        self.logger = get_logger(__name__)
        self.notices: List[Tuple[str, str]] = []

    def error(self, message: str) -> None:
        self.notices.append(("error", message))
        self.logger.error(f"Notice: {message}")

    def warning(self, message: str) -> None:
        self.notices.append(("warning", message))
        self.logger.warning(f"Notice: {message}")


class StreamlitNotifier(Notifier):
    """Shows notices as Streamlit toasts so they survive a rerun"""

    def error(self, message: str) -> None:
        st.toast(message, icon="🚨")

    def warning(self, message: str) -> None:
        st.toast(message, icon="⚠️")
