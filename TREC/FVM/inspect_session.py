#!/usr/bin/env python3
# =============================================================================
# inspect_session.py — ttyrec Session Inspector
# =============================================================================
#
# Decodes a .ttyrec file and reports whether the editor can load it, how its
# frames are paced, and which frames look suspicious.
#
# Usage:
#   python -m TREC.FVM.inspect_session <path_to_ttyrec>
#   python -m TREC.FVM.inspect_session <path_to_ttyrec> --max-delay 5
#   python -m TREC.FVM.inspect_session <path_to_ttyrec> --dump-frames 20
#
# Output sections:
#   [1] File info          — path, size on disk
#   [2] Decode report      — frame count, payload bytes, baseline timestamp
#   [3] Delay statistics   — min / max / mean / median / p95, total duration
#   [4] Timing anomalies   — negative delays, long pauses, usec >= 1,000,000
#   [5] Frame dump         — optional, first N frames
#   [6] VERDICT            — PASS / FAIL with reason
#
# Negative delays are legal in the format (the decoder surfaces them) but a
# player will stall on them, so they fail the verdict.
# =============================================================================

from __future__ import annotations
import sys, os, argparse
from typing import NamedTuple

import numpy as np

from TREC.FMM.constants import USEC_PER_SEC
from TREC.FGM.frame_writer import encode_payload_text, format_delay
from TREC.FVM.frame_parser import Session, parse
from TREC.errors import FrameDecodeError

# ---------------------------------------------------------------------------
# Report thresholds
# ---------------------------------------------------------------------------
DEFAULT_MAX_DELAY = 60.0     # seconds; longer pauses are flagged, not failed
DUMP_PREVIEW_CHARS = 48      # payload escapes shown per frame in the dump

DIVIDER = "=" * 68


class SessionReport(NamedTuple):
    frame_count:     int
    payload_bytes:   int
    duration:        float
    delay_min:       float
    delay_max:       float
    delay_mean:      float
    delay_median:    float
    delay_p95:       float
    negative_delays: list[int]     # frame indices with delay < 0
    long_delays:     list[int]     # frame indices with delay > max_delay
    usec_overflows:  list[int]     # frame indices with usec >= 1,000,000
    largest_frame:   int           # index of the frame with the most payload

    @property
    def monotonic(self) -> bool:
        return not self.negative_delays


def inspect_session(session: Session,
                    max_delay: float = DEFAULT_MAX_DELAY) -> SessionReport:
    """Compute the inspector report for a decoded session. Prints nothing."""
    delays = np.array([f.delay for f in session.frames], dtype=np.float64)
    sizes  = np.array([f.size for f in session.frames], dtype=np.int64)
    usecs  = np.array([f.microseconds for f in session.frames], dtype=np.int64)

    if delays.size == 0:
        return SessionReport(0, 0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, [], [], [], -1)

    return SessionReport(
        frame_count     = int(delays.size),
        payload_bytes   = int(sizes.sum()),
        duration        = float(delays.sum()),
        delay_min       = float(delays.min()),
        delay_max       = float(delays.max()),
        delay_mean      = float(delays.mean()),
        delay_median    = float(np.median(delays)),
        delay_p95       = float(np.percentile(delays, 95)),
        negative_delays = np.flatnonzero(delays < 0).tolist(),
        long_delays     = np.flatnonzero(delays > max_delay).tolist(),
        usec_overflows  = np.flatnonzero(usecs >= USEC_PER_SEC).tolist(),
        largest_frame   = int(np.argmax(sizes)),
    )


def run_inspect(path: str, max_delay: float, dump_frames: int) -> bool:
    """
    Run the full inspection on one file.
    Returns True if the file decodes and plays forward, False otherwise.
    """
    # -----------------------------------------------------------------------
    # [1] File info
    # -----------------------------------------------------------------------
    print(f"\n{DIVIDER}")
    print(f"  ttyrec Session Inspector")
    print(DIVIDER)

    if not os.path.exists(path):
        print(f"  [!!] File not found: {path}")
        return False

    with open(path, "rb") as fh:
        raw = fh.read()

    print(f"  File     : {os.path.basename(path)}")
    print(f"  Size     : {len(raw):,} bytes")

    # -----------------------------------------------------------------------
    # [2] Decode
    # -----------------------------------------------------------------------
    print(f"\n  -- Decode Report --")
    try:
        session = parse(raw)
    except FrameDecodeError as e:
        print(f"  [FAIL] {type(e).__name__}: {e}")
        print(f"\n{DIVIDER}")
        print(f"  VERDICT: FAIL — the editor cannot load {os.path.basename(path)}")
        print(f"{DIVIDER}\n")
        return False

    report = inspect_session(session, max_delay)
    print(f"  Frames decoded    : {report.frame_count:,}")
    print(f"  Payload bytes     : {report.payload_bytes:,}")
    print(f"  Baseline          : {session.start_seconds}.{session.start_microseconds:06d}")
    largest = session.frames[report.largest_frame]
    print(f"  Largest frame     : #{report.largest_frame}  ({largest.size:,} bytes)")
    print(f"  [PASS] Stream is structurally sound")

    # -----------------------------------------------------------------------
    # [3] Delay statistics
    # -----------------------------------------------------------------------
    print(f"\n  -- Delay Statistics --")
    print(f"  Total duration    : {report.duration:.6f} s")
    print(f"  Min / Max         : {report.delay_min:.6f} s  /  {report.delay_max:.6f} s")
    print(f"  Mean / Median     : {report.delay_mean:.6f} s  /  {report.delay_median:.6f} s")
    print(f"  95th percentile   : {report.delay_p95:.6f} s")

    # -----------------------------------------------------------------------
    # [4] Timing anomalies
    # -----------------------------------------------------------------------
    print(f"\n  -- Timing Anomalies --")
    if report.negative_delays:
        print(f"  [FAIL] {len(report.negative_delays)} frame(s) go back in time")
        for i in report.negative_delays[:5]:
            print(f"    frame #{i}: delay {session.frames[i].delay:.6f} s")
    else:
        print(f"  [PASS] Timestamps never go backwards")

    if report.long_delays:
        print(f"  [INFO] {len(report.long_delays)} pause(s) longer than {max_delay:g} s")
        for i in report.long_delays[:5]:
            print(f"    frame #{i}: delay {session.frames[i].delay:.6f} s")

    if report.usec_overflows:
        print(f"  [INFO] {len(report.usec_overflows)} frame(s) with microseconds >= {USEC_PER_SEC:,}")

    # -----------------------------------------------------------------------
    # [5] Frame dump
    # -----------------------------------------------------------------------
    if dump_frames:
        print(f"\n  -- Frame Dump (first {dump_frames}) --")
        for i, f in enumerate(session.frames[:dump_frames]):
            data = encode_payload_text(f.payload)
            if len(data) > DUMP_PREVIEW_CHARS:
                data = data[:DUMP_PREVIEW_CHARS] + "..."
            print(
                f"  Frame {i:04d}  "
                f"t={f.seconds}.{f.microseconds:06d}  "
                f"delay={format_delay(f.delay)}  "
                f"size={f.size}"
            )
            print(f"    data: {data}")

    # -----------------------------------------------------------------------
    # [6] Verdict
    # -----------------------------------------------------------------------
    print(f"\n{DIVIDER}")
    if report.monotonic:
        print(f"  VERDICT: PASS — recording decodes and plays forward")
    else:
        print(f"  VERDICT: FAIL — recording has non-monotonic timestamps")
    print(f"{DIVIDER}\n")

    return report.monotonic


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def main() -> None:
    parser = argparse.ArgumentParser(
        description="ttyrec Session Inspector",
    )
    parser.add_argument("ttyrec", help="Path to a .ttyrec recording")
    parser.add_argument(
        "--max-delay", type=float, default=DEFAULT_MAX_DELAY,
        help=f"Flag pauses longer than this many seconds, default {DEFAULT_MAX_DELAY:g}",
    )
    parser.add_argument(
        "--dump-frames", type=int, default=0, metavar="N",
        help="Print the first N decoded frames",
    )
    args = parser.parse_args()

    ok = run_inspect(
        path=args.ttyrec,
        max_delay=args.max_delay,
        dump_frames=args.dump_frames,
    )
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
