"""Payload Extractor – SRP: strip the envelope, keep the record.

Every message carries one top-level object named after its type; the fields
live inside it.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

from avroforge.domain.errors import EnvelopeKeyMissingError, PayloadFormatError


class PayloadExtractor:
    def extract(self, raw_body: bytes, envelope_key: str) -> Mapping[str, Any]:
        try:
            document = json.loads(raw_body.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise PayloadFormatError(f"body is not UTF-8: {exc}") from exc
        except ValueError as exc:
            raise PayloadFormatError(f"body is not JSON: {exc}") from exc
        except RecursionError as exc:
            raise PayloadFormatError("body nests too deeply to parse") from exc

        if not isinstance(document, dict):
            raise PayloadFormatError(f"body is a JSON {type(document).__name__}, expected an object")

        payload = document.get(envelope_key)
        if not isinstance(payload, dict):
            raise EnvelopeKeyMissingError(envelope_key)
        return payload
