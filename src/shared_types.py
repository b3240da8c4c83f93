"""Shared enums and types for obsidian-sync."""

from enum import StrEnum


class ObservationType(StrEnum):
    BUGFIX = "bugfix"
    FEATURE = "feature"
    REFACTOR = "refactor"
    CHANGE = "change"
    DISCOVERY = "discovery"
    DECISION = "decision"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        # Unrecognised types render with a default marker instead of failing
        return cls.UNKNOWN


class Locale(StrEnum):
    ZH = "zh"
    EN = "en"
