"""
Local notification + haptic hooks.

The host (phone shell, desktop tray, test) subclasses `Notifier`; the
default just logs so that the engines can run headless.
"""
from __future__ import annotations

import logging

_LOG = logging.getLogger(__name__)


class Notifier:
    def notify(self, title: str, body: str = "") -> None:
        _LOG.info("notify: %s %s", title, body)

    def haptic(self, pattern: str) -> None:
        _LOG.debug("haptic: %s", pattern)
