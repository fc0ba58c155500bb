# =============================================================================
# edit_session.py — Editable Row Collection
# =============================================================================
#
# Holds the user-editable form of one loaded recording: the baseline
# timestamp plus an ordered list of (delay_text, data_text) rows. Whatever UI
# presents the rows keeps this object in sync; saving re-encodes the rows as
# they are at that moment and never touches the decoded Session.
#
# One EditSession per loaded file. Loading another file means building a new
# EditSession and dropping the old one; there is no shared "current" state.
#
# Example:
#     edit = EditSession.from_bytes(raw)
#     edit.remove(0)
#     edit.add()                              # "0.100000", empty payload
#     edit.update(0, data_text="\\x68\\x69")
#     saved = edit.save()                     # SavedRecording(data, ...)
# =============================================================================

from __future__ import annotations
from typing import Iterator, NamedTuple

from TREC.FMM.constants import (
    DEFAULT_DATA_TEXT, DEFAULT_DELAY_TEXT,
    DEFAULT_FILENAME, MIME_TYPE,
)
from TREC.FGM.frame_writer import EditableFrame, serialize, to_editable
from TREC.FVM.frame_parser import Session, parse


class SavedRecording(NamedTuple):
    data:      bytes
    filename:  str
    mime_type: str


class EditSession:
    """
    Mutable, ordered editor rows for a single ttyrec recording.

    Parameters
    ----------
    start_seconds, start_microseconds : int
        Baseline timestamp the first row's delay is added to.
    rows : iterable of EditableFrame or (delay_text, data_text) tuples
    """

    def __init__(self, start_seconds: int = 0, start_microseconds: int = 0,
                 rows=()) -> None:
        self.start_seconds      = start_seconds
        self.start_microseconds = start_microseconds
        self._rows: list[EditableFrame] = [EditableFrame(*r) for r in rows]

    @classmethod
    def from_session(cls, session: Session) -> "EditSession":
        return cls(session.start_seconds, session.start_microseconds,
                   to_editable(session))

    @classmethod
    def from_bytes(cls, buffer) -> "EditSession":
        return cls.from_session(parse(buffer))

    # ── Row access ───────────────────────────────────────────────────────────

    @property
    def rows(self) -> list[EditableFrame]:
        """A copy of the current rows, in playback order."""
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[EditableFrame]:
        return iter(list(self._rows))

    def __getitem__(self, index: int) -> EditableFrame:
        return self._rows[index]

    # ── Editing ──────────────────────────────────────────────────────────────

    def add(self, delay_text: str = DEFAULT_DELAY_TEXT,
            data_text: str = DEFAULT_DATA_TEXT) -> int:
        """Append a row at the end and return its index."""
        self._rows.append(EditableFrame(delay_text, data_text))
        return len(self._rows) - 1

    def insert(self, index: int, delay_text: str = DEFAULT_DELAY_TEXT,
               data_text: str = DEFAULT_DATA_TEXT) -> None:
        self._rows.insert(index, EditableFrame(delay_text, data_text))

    def remove(self, index: int) -> EditableFrame:
        """Delete and return the row at ``index``. Raises IndexError."""
        return self._rows.pop(index)

    def update(self, index: int, delay_text: str | None = None,
               data_text: str | None = None) -> EditableFrame:
        row = self._rows[index]
        if delay_text is not None:
            row = row._replace(delay_text=delay_text)
        if data_text is not None:
            row = row._replace(data_text=data_text)
        self._rows[index] = row
        return row

    # ── Output ───────────────────────────────────────────────────────────────

    def to_bytes(self) -> bytes:
        """Encode the current rows. Raises FrameEncodeError on a bad row."""
        return serialize(self.start_seconds, self.start_microseconds, self._rows)

    def save(self, filename: str = DEFAULT_FILENAME) -> SavedRecording:
        """Encode the rows and package them for a save-as download."""
        return SavedRecording(self.to_bytes(), filename, MIME_TYPE)
