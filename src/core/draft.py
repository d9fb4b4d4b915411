"""In-memory store for the editable schema document."""

from __future__ import annotations

from typing import Callable

from core.models import Draft

DraftListener = Callable[[Draft], None]


class DraftStore:
    """Holds the draft and its baseline; dirty state is always derived."""

    def __init__(self) -> None:
        self._draft = Draft(content="", baseline="")
        self._loaded = False
        self._listeners: list[DraftListener] = []

    @property
    def content(self) -> str:
        return self._draft.content

    @property
    def baseline(self) -> str:
        return self._draft.baseline

    @property
    def is_dirty(self) -> bool:
        return self._draft.is_dirty

    @property
    def loaded(self) -> bool:
        return self._loaded

    def snapshot(self) -> Draft:
        return self._draft

    def subscribe(self, listener: DraftListener) -> None:
        self._listeners.append(listener)

    def load(self, server_value: str) -> None:
        """Adopt a value known to match the server; the draft becomes clean."""

        self._loaded = True
        self._replace(Draft(content=server_value, baseline=server_value))

    def edit(self, new_content: str) -> None:
        self._replace(Draft(content=new_content, baseline=self._draft.baseline))

    def discard_edits(self) -> None:
        self._replace(Draft(content=self._draft.baseline, baseline=self._draft.baseline))

    def _replace(self, draft: Draft) -> None:
        # Content and baseline are swapped in as one frozen value so readers
        # never observe a half-updated draft.
        if draft == self._draft:
            return
        self._draft = draft
        for listener in list(self._listeners):
            listener(draft)
