"""
Frame range parsing and chunking.

A frame range is a comma separated list of frame numbers and inclusive
ranges, e.g. "3, 5-10, 47-327". Chunks are consecutive groups of at most
chunk_size frames, serialized back to the same compact notation.
"""
import logging
import re
from typing import Iterable, List

from .errors import InvalidChunkSizeError, MalformedFrameRangeError
from .models import Chunk

logger = logging.getLogger(__name__)

MAX_FRAMES = 1_000_000

_TOKEN_RE = re.compile(r"^(\d+)(?:\s*-\s*(\d+))?$")


def parse_frame_range(
    expression: str,
    strict: bool = False,
    max_frames: int = MAX_FRAMES,
) -> List[int]:
    """
    Expand a frame range expression into ascending distinct frame numbers.

    Overlapping or out-of-order parts are merged unless strict is set, in
    which case they are rejected. Expressions spanning more than max_frames
    frames are rejected before any frame list is built.
    """
    if expression is None or not str(expression).strip():
        raise MalformedFrameRangeError(str(expression), "empty frame range")

    spans = []
    span_total = 0
    last_frame = None
    for raw in str(expression).split(","):
        token = raw.strip()
        if not token:
            raise MalformedFrameRangeError(expression, "empty element")

        m = _TOKEN_RE.match(token)
        if not m:
            raise MalformedFrameRangeError(expression, f"can't parse {token!r}")

        start = int(m.group(1))
        end = int(m.group(2)) if m.group(2) is not None else start
        if end < start:
            raise MalformedFrameRangeError(expression, f"descending range {token!r}")

        if strict and last_frame is not None and start <= last_frame:
            raise MalformedFrameRangeError(
                expression, f"{token!r} overlaps or precedes an earlier part"
            )
        last_frame = end

        span_total += end - start + 1
        if span_total > max_frames:
            raise MalformedFrameRangeError(
                expression, f"more than {max_frames} frames"
            )
        spans.append((start, end))

    frames = set()
    for start, end in spans:
        frames.update(range(start, end + 1))
    return sorted(frames)


def merge_frames(frames: Iterable[int]) -> str:
    """Compact ascending frames into range notation: [1, 2, 3, 7] -> "1-3,7"."""
    parts = []
    run_start = run_end = None
    for frame in frames:
        if run_start is None:
            run_start = run_end = frame
        elif frame == run_end + 1:
            run_end = frame
        else:
            parts.append(_format_run(run_start, run_end))
            run_start = run_end = frame
    if run_start is not None:
        parts.append(_format_run(run_start, run_end))
    return ",".join(parts)


def _format_run(start: int, end: int) -> str:
    return str(start) if start == end else f"{start}-{end}"


def chunk_frames(
    expression: str,
    chunk_size: int,
    strict: bool = False,
    max_frames: int = MAX_FRAMES,
) -> List[Chunk]:
    """Split a frame range into chunks of at most chunk_size frames, in order."""
    if chunk_size < 1:
        raise InvalidChunkSizeError(chunk_size)

    frames = parse_frame_range(expression, strict=strict, max_frames=max_frames)

    chunks = []
    for i in range(0, len(frames), chunk_size):
        group = tuple(frames[i:i + chunk_size])
        chunks.append(Chunk(frames=group, range_text=merge_frames(group)))

    logger.debug(
        "Split %d frames from %r into %d chunks of up to %d",
        len(frames), expression, len(chunks), chunk_size,
    )
    return chunks
