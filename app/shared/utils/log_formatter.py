# app/shared/utils/log_formatter.py

import json
import logging


class ContextFormatter(logging.Formatter):
    """Appends the `context` and `meta` extras of a record to the message line."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)

        context = getattr(record, "context", None)
        if context:
            line = f"{line} [{context}]"

        meta = getattr(record, "meta", None)
        if meta:
            line = f"{line} meta={json.dumps(meta, default=str, ensure_ascii=False)}"

        return line
