"""Desktop notice when an unattended loop stops. Skipped quietly without notify-send."""

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)


def _send(summary: str, body: str, urgency: str) -> None:
    if shutil.which("notify-send") is None:
        logger.debug("notify-send not on PATH; no desktop notification")
        return

    cmd = ["notify-send", "--urgency", urgency, "--app-name", "Ralph", summary, body]
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=5)
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.warning(f"Desktop notification not sent: {e}")
        return
    if proc.returncode != 0:
        logger.warning(f"notify-send exited {proc.returncode}: {proc.stderr.strip()}")


def notify_loop_done(project: str, completed: int, total: int) -> None:
    _send(f"Ralph: {project}", f"All stories complete ({completed}/{total})", "low")


def notify_loop_aborted(project: str, remaining: int) -> None:
    _send(f"Ralph: {project}", f"Iteration limit reached, {remaining} stories remaining", "critical")
