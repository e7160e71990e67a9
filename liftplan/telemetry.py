"""
Liftplan: Analytics sink

Best-effort diagnostic events. Nothing here may block or fail a
calculation: remote delivery happens on a daemon thread and every error is
logged and dropped.
"""
import logging
import threading
from datetime import datetime, timezone

import requests

from liftplan.config import ANALYTICS_KEY, ANALYTICS_TIMEOUT, ANALYTICS_URL

logger = logging.getLogger(__name__)

_METHODS = {"info": "log_info", "warn": "log_warn", "error": "log_err"}
_LOG_LEVELS = {"info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}


def _entry(level: str, category: str, event: str, message: str, context: dict) -> dict:
    return {
        "level": level,
        "category": category,
        "event": event,
        "message": message,
        "context": context or {},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class AnalyticsSink:
    """
    Default sink: writes every event to the `liftplan.telemetry` logger and,
    when an endpoint is configured, POSTs it as JSON in the background.
    """

    def __init__(self, url: str = ANALYTICS_URL, api_key: str = ANALYTICS_KEY,
                 timeout: float = ANALYTICS_TIMEOUT):
        self.url = url
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        if api_key:
            self.headers["Authorization"] = f"Bearer {api_key}"

    def log_info(self, category: str, event: str, message: str = "", context: dict = None):
        self._log("info", category, event, message, context)

    def log_warn(self, category: str, event: str, message: str = "", context: dict = None):
        self._log("warn", category, event, message, context)

    def log_err(self, category: str, event: str, message: str = "", context: dict = None):
        self._log("error", category, event, message, context)

    def _log(self, level, category, event, message, context):
        entry = _entry(level, category, event, message, context)
        logger.log(_LOG_LEVELS[level], "[%s] %s: %s", category, event, message)
        if self.url:
            threading.Thread(target=self._post, args=(entry,), daemon=True).start()

    def _post(self, entry: dict) -> None:
        try:
            r = requests.post(self.url, headers=self.headers, json=entry, timeout=self.timeout)
            r.raise_for_status()
        # TypeError/ValueError: context values requests cannot encode as JSON
        except (requests.exceptions.RequestException, TypeError, ValueError) as e:
            logger.debug("Analytics delivery failed for %s: %s", entry["event"], e)


class MemorySink(AnalyticsSink):
    """Keeps events in `self.entries` instead of shipping them."""

    def __init__(self):
        super().__init__(url="")
        self.entries = []

    def _log(self, level, category, event, message, context):
        self.entries.append(_entry(level, category, event, message, context))


_default_sink = None


def get_default_sink() -> AnalyticsSink:
    global _default_sink
    if _default_sink is None:
        _default_sink = AnalyticsSink()
    return _default_sink


def emit(sink, level: str, category: str, event: str, message: str = "", context: dict = None) -> None:
    """Send one event; sink failures are swallowed so callers never see them."""
    if sink is None:
        sink = get_default_sink()
    try:
        getattr(sink, _METHODS[level])(category, event, message, context)
    except Exception as e:
        logger.debug("Analytics sink raised on %s: %s", event, e)
