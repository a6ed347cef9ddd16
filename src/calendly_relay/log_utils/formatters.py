"""Custom logging formatters."""

import dataclasses
import json
import logging
import re
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple


@dataclasses.dataclass
class LogError:
    name: str
    message: str
    stack_trace: Optional[str] = None
    args: Optional[Tuple[Any, ...]] = None


@dataclasses.dataclass
class LogRecord:
    event: str
    message: str
    request_id: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    error: Optional[LogError] = None


SENSITIVE_KEYS = {"access_token", "refresh_token", "client_secret", "token", "code", "authorization"}

_SENSITIVE_PATTERNS = [
    (r'(Bearer\s+)([A-Za-z0-9\-_\.=]+)', lambda m: m.group(1) + _mask_value(m.group(2))),
    (r'("(?:access_token|refresh_token|client_secret|token)"\s*:\s*")([^"]+)', lambda m: m.group(1) + "********"),
    (r'([?&](?:token|code|access_token|refresh_token|client_secret)=)([^&\s"]+)', lambda m: m.group(1) + "********"),
]


def _mask_value(value: str, mask_char: str = "*") -> str:
    if len(value) <= 8:
        return mask_char * 8
    return value[:4] + mask_char * 8 + value[-2:]


def mask_sensitive_data(data: Any, mask_char: str = "*") -> Any:
    """Recursively mask tokens and secrets in dictionaries, lists, and strings."""
    if isinstance(data, dict):
        masked = {}
        for key, value in data.items():
            if isinstance(key, str) and key.lower() in SENSITIVE_KEYS and isinstance(value, str):
                masked[key] = _mask_value(value, mask_char)
            else:
                masked[key] = mask_sensitive_data(value, mask_char)
        return masked
    elif isinstance(data, list):
        return [mask_sensitive_data(item, mask_char) for item in data]
    elif isinstance(data, str):
        return mask_sensitive_string(data, mask_char)
    else:
        return data


def mask_sensitive_string(text: str, mask_char: str = "*") -> str:
    """Mask bearer tokens, secret JSON fields and secret query parameters in a string."""
    if not isinstance(text, str):
        return text

    masked_text = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        masked_text = re.sub(pattern, replacement, masked_text, flags=re.IGNORECASE)
    return masked_text


def create_debug_request_info(method: str, url: str, headers: Dict[str, str],
                              body: Any = None) -> Dict[str, Any]:
    """Describe an outbound request with sensitive values masked."""
    info = {
        "method": method,
        "url": url,
        "headers": mask_sensitive_data(headers),
    }
    if body is not None:
        info["request_body"] = mask_sensitive_data(body)
    return info


def _format_exc_info(exc_info) -> Dict[str, Any]:
    exc_type, exc_value, exc_tb = exc_info
    return {
        "name": exc_type.__name__ if exc_type else "UnknownError",
        "message": str(exc_value),
        "stack_trace": "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
        "args": exc_value.args if hasattr(exc_value, "args") else [],
    }


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter with color support and simplified output for CLI."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[95m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        log_dict = self._get_simplified_log_dict(record)
        formatted_json = json.dumps(log_dict, ensure_ascii=False, default=str)

        # Only color TTY output
        if self.use_colors and hasattr(sys.stdout, 'isatty') and sys.stdout.isatty():
            color = self.COLORS.get(record.levelname, '')
            return f"{color}{formatted_json}{self.RESET}"
        return formatted_json

    def _get_simplified_log_dict(self, record: logging.LogRecord) -> dict:
        """Extract simplified log dictionary for console output."""
        simplified = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).strftime("%H:%M:%S"),
            "level": record.levelname,
        }
        log_payload = getattr(record, "log_record", None)

        if not isinstance(log_payload, LogRecord):
            simplified["message"] = record.getMessage()
            return simplified

        message = log_payload.message
        if len(message) > 200:
            message = message[:200] + "..."
        simplified["event"] = log_payload.event
        simplified["message"] = message

        if log_payload.request_id:
            simplified["req_id"] = log_payload.request_id[:8]

        if log_payload.error and record.levelname in ['ERROR', 'WARNING', 'CRITICAL']:
            simplified["error"] = log_payload.error.name
            if log_payload.error.message != log_payload.message:
                simplified["error_msg"] = log_payload.error.message[:100]

        # Keep just the fields that matter when scanning a console
        if log_payload.data:
            for field in ('status_code', 'method', 'path', 'upstream_path'):
                if field in log_payload.data:
                    simplified[field] = log_payload.data[field]

        return simplified


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        header = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }
        log_payload = getattr(record, "log_record", None)
        if isinstance(log_payload, LogRecord):
            header["detail"] = dataclasses.asdict(log_payload)
        else:
            header["message"] = record.getMessage()
            if record.exc_info:
                header["error"] = _format_exc_info(record.exc_info)
        return json.dumps(header, ensure_ascii=False, default=str)


class UvicornAccessFormatter(logging.Formatter):
    """Formatter for uvicorn access logs: query-string secrets masked, dimmed on a TTY."""

    INFO_GRAY = '\033[90m'
    RESET = '\033[0m'

    def __init__(self):
        super().__init__(fmt="%(levelname)s:     %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        formatted_message = mask_sensitive_string(super().format(record))
        if hasattr(sys.stdout, 'isatty') and sys.stdout.isatty():
            return f"{self.INFO_GRAY}{formatted_message}{self.RESET}"
        return formatted_message
