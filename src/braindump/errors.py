"""Exception types for Braindump."""


class BraindumpError(Exception):
    """Base class for all Braindump errors."""


class ConfigError(BraindumpError):
    """Invalid configuration (bad TOML, bad regex, unknown fallback)."""


class NoteNotFoundError(BraindumpError):
    """No note with the given ID exists."""

    def __init__(self, note_id: str):
        super().__init__(f"Note not found: {note_id}")
        self.note_id = note_id
