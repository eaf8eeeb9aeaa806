from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_RESERVED_ATTRS = frozenset(
  vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Chatty client libraries; analysis polling would otherwise log every request.
_QUIET_LOGGERS = ("uvicorn.access", "urllib3", "azure.identity", "azure.core.pipeline.policies.http_logging_policy")


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
  fields: Dict[str, Any] = {}
  for key, value in record.__dict__.items():
    if key.startswith("_") or key in _RESERVED_ATTRS:
      continue
    if isinstance(value, (str, int, float, bool)) or value is None:
      fields[key] = value
  return fields


class JsonFormatter(logging.Formatter):
  """One JSON object per line: ts, level, logger, message plus scalar extras."""

  def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
    payload: Dict[str, Any] = {
      "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
      "level": record.levelname,
      "logger": record.name,
      "message": record.getMessage(),
    }
    if record.exc_info:
      payload["exc_info"] = self.formatException(record.exc_info)
    for key, value in _extra_fields(record).items():
      payload.setdefault(key, value)
    return json.dumps(payload, ensure_ascii=False)


def _log_level() -> str:
  return os.getenv("LOG_LEVEL", "INFO").upper()


def _structured_from_env() -> bool:
  return os.getenv("LOG_FORMAT", "json").strip().lower() != "plain"


def configure_logging(structured: Optional[bool] = None) -> None:
  """Route all logging to stdout; JSON unless ``LOG_FORMAT=plain``."""
  if structured is None:
    structured = _structured_from_env()

  root = logging.getLogger()
  for handler in list(root.handlers):
    root.removeHandler(handler)

  root.setLevel(_log_level())
  stream_handler = logging.StreamHandler(sys.stdout)
  stream_handler.setFormatter(JsonFormatter() if structured else logging.Formatter(_PLAIN_FORMAT))
  root.addHandler(stream_handler)

  for name in _QUIET_LOGGERS:
    logging.getLogger(name).setLevel(logging.WARNING)
