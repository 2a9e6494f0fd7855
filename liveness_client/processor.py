"""
Interpretation and printing of the LiveDetection response.
"""
import json
import logging
import sys
from typing import Any, Optional, TextIO

from pydantic import ValidationError

from liveness_client.errors import ServiceStatusError
from liveness_client.schemas import LivenessResult

logger = logging.getLogger(__name__)

# Upper bound on prune-and-retry rounds when a decoded document has bad fields
MAX_DECODE_PASSES = 50


def _prune(document: Any, loc) -> bool:
    """Remove the value at loc from document. Returns False if nothing was removed."""
    if not loc:
        return False
    parent = document
    for key in loc[:-1]:
        try:
            parent = parent[key]
        except (KeyError, IndexError, TypeError):
            return False

    last = loc[-1]
    if isinstance(parent, dict) and last in parent:
        del parent[last]
        return True
    if isinstance(parent, list) and isinstance(last, int) and 0 <= last < len(parent):
        # keep list positions stable so sample numbering does not shift
        if parent[last] == {}:
            return False
        parent[last] = {}
        return True
    return False


def decode_result(body: bytes) -> LivenessResult:
    """
    Decode a response body into a LivenessResult without ever failing.

    Malformed JSON or a document that is not an object gives an empty result.
    Fields of the wrong type are dropped and keep their zero value while the
    rest of the document is still decoded. Each problem is logged as a warning.
    """
    try:
        document = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning("Can not unmarshal JSON. %s", e)
        return LivenessResult()

    if not isinstance(document, dict):
        logger.warning("Can not unmarshal JSON. Expected an object, got %s", type(document).__name__)
        return LivenessResult()

    warned = False
    for _ in range(MAX_DECODE_PASSES):
        try:
            return LivenessResult.model_validate_json(json.dumps(document))
        except ValidationError as e:
            if not warned:
                logger.warning("Can not unmarshal JSON. %d invalid field(s)", e.error_count())
                warned = True
            pruned = [_prune(document, tuple(error["loc"])) for error in e.errors()]
            if not any(pruned):
                break

    logger.warning("Giving up on partial decode, using an empty result")
    return LivenessResult()


def _write_raw(body: bytes, out: TextIO):
    """Write body followed by a newline, byte for byte when out has a binary buffer."""
    buffer = getattr(out, "buffer", None)
    if buffer is None:
        print(body.decode("utf-8", errors="replace"), file=out)
        return
    out.flush()
    buffer.write(body + b"\n")
    buffer.flush()


def pretty_print(result: LivenessResult) -> str:
    return json.dumps(result.model_dump(by_alias=True), indent="\t")


def process_response(status_code: int, body: bytes, detailed: bool,
                     out: Optional[TextIO] = None) -> Optional[LivenessResult]:
    """
    Print the outcome of a LiveDetection call.

    Raises:
        ServiceStatusError: If status_code is not 200
    """
    if out is None:
        out = sys.stdout

    if status_code != 200:
        raise ServiceStatusError(status_code)

    if not detailed:
        _write_raw(body, out)
        return None

    result = decode_result(body)
    print("Detailed response body:\n" + pretty_print(result), file=out)
    if result.success:
        print("Result:\nImages are recorded from a live person.", file=out)
    else:
        print("Result:\nImages are NOT recorded from a live person.", file=out)

    for number, sample in enumerate(result.samples, start=1):
        if not sample.errors:
            continue
        print(f"Errors found for image{number}:", file=out)
        for error in sample.errors:
            print(f"{error.code} - {error.message} - {error.details}", file=out)

    return result
