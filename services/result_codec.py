"""
Result payload codec.

Turns the raw grading payload stored on a submission into a ResultRecord.
The grader writes the payload asynchronously, so an absent or unreadable
payload means "not graded yet" from the client's point of view.
"""

import json
import logging
import math
from typing import Optional, Any, Tuple

from core.errors import DecodeFailure, DecodeResult
from core.models import ResultRecord

logger = logging.getLogger(__name__)

_EXCERPT_LENGTH = 80


def _as_samples(value: Any) -> Optional[Tuple[float, ...]]:
    """Return value as a tuple of finite numbers, or None if it is not a numeric list."""
    if not isinstance(value, list):
        return None
    samples = []
    for item in value:
        # bool is an int subclass, but True is not a score
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            return None
        try:
            number = float(item)
        except OverflowError:
            return None
        if not math.isfinite(number):
            return None
        samples.append(number)
    return tuple(samples)


class ResultPayloadCodec:
    """Decodes grading payloads; never raises on bad input."""

    def decode(self, raw: Optional[str], submission_id: Optional[int] = None) -> DecodeResult:
        """
        Decode a raw payload.

        Args:
            raw: Payload as stored on the submission, may be None
            submission_id: Only used for log context

        Returns:
            DecodeResult with a record, or with ABSENT / MALFORMED failure
        """
        if raw is None or not raw.strip():
            logger.debug(f"No result payload yet for submission {submission_id}")
            return DecodeResult.fail(DecodeFailure.ABSENT)

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            return self._malformed(raw, submission_id, f"invalid JSON: {e}")

        if not isinstance(data, dict):
            return self._malformed(raw, submission_id, "payload is not an object")

        if "time" not in data or "score" not in data:
            return self._malformed(raw, submission_id, "missing time or score")

        time = _as_samples(data["time"])
        score = _as_samples(data["score"])
        if time is None or score is None:
            return self._malformed(raw, submission_id, "time and score must be lists of numbers")
        if len(time) != len(score):
            return self._malformed(
                raw, submission_id,
                f"time has {len(time)} samples but score has {len(score)}"
            )

        return DecodeResult.ok(ResultRecord(time=time, score=score))

    def encode(self, record: ResultRecord) -> str:
        """Serialize a record back to the stored payload format."""
        return json.dumps(record.to_dict())

    @staticmethod
    def _malformed(raw: str, submission_id: Optional[int], why: str) -> DecodeResult:
        excerpt = raw if len(raw) <= _EXCERPT_LENGTH else raw[:_EXCERPT_LENGTH] + "…"
        logger.warning(f"Malformed result payload for submission {submission_id}: {why}; payload={excerpt!r}")
        return DecodeResult.fail(DecodeFailure.MALFORMED)
