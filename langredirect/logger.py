# langredirect/logger.py
"""
Structured logger for LangRedirect.
Provides:
 - Colored console output (disabled in CI)
 - Rotating log files (info + JSON debug)
 - TRACE-level (custom below DEBUG)
 - Phase markers and timing logs
 - Child loggers per module (langredirect.checker, langredirect.page, ...)
"""

import logging
import logging.handlers
import os
import sys
import json
import time

# -------------------------------------------------------------------
# CONFIG
# -------------------------------------------------------------------

LOG_ROOT = os.getenv("LANGREDIRECT_LOG_DIR", os.path.join(os.getcwd(), "logs"))

INFO_LOG = os.path.join(LOG_ROOT, "langredirect_info.log")
DEBUG_LOG = os.path.join(LOG_ROOT, "langredirect_debug.log")

ENABLE_COLOR = os.getenv("CI", "false").lower() != "true"

# Custom TRACE level (below DEBUG)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


def trace(self, message, *args, **kws):
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kws)

logging.Logger.trace = trace


# -------------------------------------------------------------------
# COLOR FORMATTING
# -------------------------------------------------------------------

COLOR = {
    "grey": "\x1b[38;21m",
    "yellow": "\x1b[33;21m",
    "red": "\x1b[31;21m",
    "cyan": "\x1b[36;21m",
    "green": "\x1b[32;21m",
    "reset": "\x1b[0m",
}

def colorize(level, message):
    if not ENABLE_COLOR:
        return message
    if level >= logging.ERROR:
        color = COLOR["red"]
    elif level >= logging.WARNING:
        color = COLOR["yellow"]
    elif level >= logging.INFO:
        color = COLOR["green"]
    elif level >= logging.DEBUG:
        color = COLOR["cyan"]
    else:
        color = COLOR["grey"]
    return f"{color}{message}{COLOR['reset']}"


class ColorFormatter(logging.Formatter):
    def format(self, record):
        ts = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created))
        return colorize(record.levelno, f"{ts} [{record.levelname}] {record.name}: {record.getMessage()}")


class JsonFormatter(logging.Formatter):
    """Structured lines for the debug log."""
    def format(self, record):
        payload = {
            "timestamp": record.created,
            "ts": time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "file": record.pathname,
            "line": record.lineno,
        }
        return json.dumps(payload, ensure_ascii=False)


# -------------------------------------------------------------------
# LOGGER FACTORY
# -------------------------------------------------------------------

def get_logger(name="langredirect", level=None):
    logger = logging.getLogger(name)

    # Avoid double-attaching handlers
    if logger.handlers:
        return logger

    level = level or os.getenv("LOG_LEVEL", "INFO")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Console goes to stderr so `resolve` output on stdout stays clean
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(getattr(logging, level.upper(), logging.INFO))
    ch.setFormatter(ColorFormatter())
    logger.addHandler(ch)

    try:
        os.makedirs(LOG_ROOT, exist_ok=True)

        ih = logging.handlers.RotatingFileHandler(
            INFO_LOG, maxBytes=10_000_000, backupCount=5, encoding="utf-8"
        )
        ih.setLevel(logging.INFO)
        ih.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s"))
        logger.addHandler(ih)

        dh = logging.handlers.RotatingFileHandler(
            DEBUG_LOG, maxBytes=15_000_000, backupCount=5, encoding="utf-8"
        )
        dh.setLevel(logging.DEBUG)
        dh.setFormatter(JsonFormatter())
        logger.addHandler(dh)
    except OSError as e:
        logger.warning("File logging disabled (%s): %s", LOG_ROOT, e)

    logger.debug("Logger initialized for '%s'", name)
    return logger


# -------------------------------------------------------------------
# UTILITY SHORTCUTS
# -------------------------------------------------------------------

def phase(logger, name):
    """Visual marker for pipeline sections."""
    logger.info("══════════════════════════════════════════════")
    logger.info("Entering phase: %s", name)
    logger.info("══════════════════════════════════════════════")


def timing(logger, label, start_time):
    elapsed = round(time.time() - start_time, 3)
    logger.info("⏱ %s: %ss", label, elapsed)
    return elapsed
