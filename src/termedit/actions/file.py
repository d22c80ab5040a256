"""Saving the buffer to disk."""

from __future__ import annotations

from termedit.buffer import BufferIOError
from termedit.modes.base_mode import ModeContext, ModeResult
from termedit.runtime import telemetry


def save_buffer(context: ModeContext, match) -> ModeResult:
    """Write the buffer to its filename.

    Without a filename this is a silent no-op. A failed write is logged and
    reported through the result; the buffer and its dirty flag stay as they
    were so the user can retry.
    """

    del match
    buffer = context.buffer
    if not buffer.filename:
        return ModeResult(consumed=True, status="save_skipped")

    try:
        written = buffer.save()
    except BufferIOError as exc:
        telemetry.record_event(
            "buffer.save_failed",
            level="error",
            data={"path": exc.path, "reason": exc.reason},
        )
        context.bus.emit("buffer.save_failed", exc)
        return ModeResult(consumed=True, status="save_failed", message=str(exc))

    line_count = buffer.document.line_count
    telemetry.record_event(
        "buffer.saved",
        data={"path": buffer.filename, "chars": written, "lines": line_count},
    )
    context.bus.emit("buffer.saved", buffer.filename)
    return ModeResult(
        consumed=True,
        status="saved",
        message=f"{line_count} lines written to {buffer.filename}",
    )


__all__ = ["save_buffer"]
